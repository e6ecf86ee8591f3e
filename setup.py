"""Setup configuration for banwarden."""

from setuptools import setup, find_packages

setup(
    name="banwarden",
    version="0.0.1",
    description="Applies moderation ban lists to the membership of Matrix rooms",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "mautrix>=0.20",
        "PyYAML>=6.0",
        "prompt_toolkit>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
