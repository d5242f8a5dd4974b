"""
Reponses JSON du serveur de bibliotheque pour les tests du client.
"""


def envelope(data, error=None):
    """Enveloppe {success, data, error} du serveur."""
    return {"success": error is None, "data": data, "error": error}


SCAN_DATA = {
    "files": [
        {
            "source_path": "/downloads/Foo/[Grp] Foo - 01 [1080p].mkv",
            "filename": "[Grp] Foo - 01 [1080p].mkv",
            "parsed_title": "Foo",
            "episode_number": 1,
            "season": None,
            "group": "Grp",
            "resolution": "1080p",
            "matched_anime": {"id": 101, "title": "Foo"},
        },
        {
            "source_path": "/downloads/Foo/[Grp] Foo S2 - 06.5.mkv",
            "filename": "[Grp] Foo S2 - 06.5.mkv",
            "parsed_title": "Foo",
            "episode_number": 6.5,
            "season": 2,
            "suggested_candidate_id": 102,
        },
    ],
    "skipped": [{"path": "/downloads/Foo/notes.txt", "reason": "not a video file"}],
    "candidates": [
        {
            "id": 101,
            "title": {"romaji": "Foo", "english": None},
            "format": "TV",
            "episode_count": 12,
            "status": "FINISHED",
            "already_in_library": True,
        },
        {
            "id": 102,
            "title": {"romaji": "Foo 2nd Season", "english": "Foo Season 2"},
            "format": "TV",
            "episode_count": 12,
        },
    ],
}

SEARCH_DATA = [
    {"id": 201, "title": {"romaji": "Bar", "english": "Bar!"}, "format": "TV"},
    {"id": 202, "title": "Bar: The Movie", "format": "MOVIE"},
]

LIBRARY_DATA = [
    {"id": 101, "title": {"romaji": "Foo"}, "monitored": True},
    {"id": 150, "title": {"romaji": "Baz"}, "monitored": False},
]

PROFILES_DATA = [{"name": "HD-1080p"}, {"name": "SD"}]

ADDED_SERIES_DATA = {
    "id": 102,
    "title": {"romaji": "Foo 2nd Season"},
    "profile_name": "HD-1080p",
    "root_folder": "/anime",
    "monitored": True,
    "path": "/anime/Foo 2nd Season",
}

IMPORT_DATA = {
    "imported": 1,
    "failed": 1,
    "imported_files": [
        {
            "source_path": "/downloads/Foo/[Grp] Foo - 01 [1080p].mkv",
            "destination_path": "/anime/Foo/Season 1/Foo - S01E01.mkv",
            "anime_id": 101,
            "episode_number": 1,
        }
    ],
    "failed_files": [
        {"source_path": "/downloads/Foo/[Grp] Foo S2 - 06.5.mkv", "error": "disk full"}
    ],
}
