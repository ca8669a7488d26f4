"""
Couche infrastructure : implementations concretes des ports.

- api/ : cache, retry, rate limiting partages
- sources/ : clients AniDB, AniList et MyAnimeList (Jikan)
"""
