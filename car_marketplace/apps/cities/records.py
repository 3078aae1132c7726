"""
City record mirrored from the API.
"""

from dataclasses import dataclass


@dataclass
class City:
    id: int
    name: str
    country: str

    def __str__(self):
        return f"{self.name}, {self.country}"
