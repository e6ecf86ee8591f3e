from banwarden.banlist.ban_list import BanList

__all__ = ["BanList"]
