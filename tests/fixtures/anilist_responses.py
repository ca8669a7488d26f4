"""
Mock AniList GraphQL responses for testing.

Reference: https://anilist.gitbook.io/anilist-apiv2-docs
"""

# POST / (SEARCH_QUERY, search="Cowboy Bebop")
ANILIST_SEARCH_RESPONSE = {
    "data": {
        "Page": {
            "media": [
                {
                    "id": 5,
                    "title": {
                        "romaji": "Cowboy Bebop: Tengoku no Tobira",
                        "english": "Cowboy Bebop: The Movie",
                        "native": "カウボーイビバップ 天国の扉",
                    },
                    "synonyms": [],
                    "startDate": {"year": 2001},
                },
                {
                    "id": 1,
                    "title": {
                        "romaji": "Cowboy Bebop",
                        "english": "Cowboy Bebop",
                        "native": "カウボーイビバップ",
                    },
                    "synonyms": ["CB"],
                    "startDate": {"year": 1998},
                },
            ]
        }
    }
}

ANILIST_SEARCH_EMPTY_RESPONSE = {"data": {"Page": {"media": []}}}

# POST / (MEDIA_QUERY, id=1)
ANILIST_MEDIA_RESPONSE = {
    "data": {
        "Media": {
            "id": 1,
            "idMal": 1,
            "title": {
                "romaji": "Cowboy Bebop",
                "english": "Cowboy Bebop (EN)",
                "native": "カウボーイビバップ",
            },
            "description": "Enter a world in the distant future.<br><br>\n<i>(Source: Sunrise)</i>",
            "startDate": {"year": 1998, "month": 4, "day": 3},
            "endDate": {"year": 1999, "month": 4, "day": 24},
            "duration": 24,
            "genres": ["Action", "Adventure", "Drama", "Sci-Fi"],
            "isAdult": False,
            "averageScore": 86,
            "stats": {
                "scoreDistribution": [
                    {"score": 10, "amount": 100},
                    {"score": 90, "amount": 250},
                    {"score": 100, "amount": 650},
                ]
            },
            "studios": {
                "nodes": [
                    {"name": "Sunrise", "isAnimationStudio": True},
                    {"name": "Bandai Visual", "isAnimationStudio": False},
                ]
            },
            "staff": {
                "edges": [
                    {"role": "Director", "node": {"name": {"full": "Shinichirou Watanabe"}}},
                    {"role": "Episode Director (ep 1)", "node": {"name": {"full": "Ikurou Satou"}}},
                    {"role": "Music", "node": {"name": {"full": "Yoko Kanno"}}},
                    {"role": "Producer", "node": {"name": {"full": "Masahiko Minami"}}},
                ]
            },
            "characters": {
                "edges": [
                    {
                        "node": {"name": {"full": "Spike Spiegel"}},
                        "voiceActors": [{"name": {"full": "Kouichi Yamadera"}}],
                    },
                    {
                        "node": {"name": {"full": "Ein"}},
                        "voiceActors": [],
                    },
                ]
            },
        }
    }
}

ANILIST_MEDIA_NOT_FOUND_RESPONSE = {"data": {"Media": None}}
