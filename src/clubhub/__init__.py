"""ClubHub: school club membership platform API."""

__version__ = "1.0.0"
