from banwarden.membership.membership_fetcher import (
    JoinedMembersFetcher,
    MembershipFetcher,
    RoomStateMembersFetcher,
    create_membership_fetcher,
)

__all__ = [
    "JoinedMembersFetcher",
    "MembershipFetcher",
    "RoomStateMembersFetcher",
    "create_membership_fetcher",
]
