"""
Profile completeness checks

Pure functions over profile rows (or anything exposing the same attributes).
Public listings only show profiles that pass these checks.
"""

from typing import Any, Dict, List

# Stock photo ids used as default avatars
ARTIST_PLACEHOLDER_IMAGE = "1043471"
VENUE_PLACEHOLDER_IMAGE = "1763075"

ARTIST_MIN_BIO_LENGTH = 50
VENUE_MIN_DESCRIPTION_LENGTH = 50
MUSICIAN_MIN_BIO_LENGTH = 30


def _result(missing_fields: List[str]) -> Dict[str, Any]:
    return {
        "is_complete": not missing_fields,
        "missing_fields": missing_fields,
    }


def _too_short(text, min_length: int) -> bool:
    return not text or len(text.strip()) < min_length


def _is_placeholder(image_url, placeholder: str) -> bool:
    return not image_url or placeholder in image_url


class ProfileCompletenessService:

    @staticmethod
    def check_artist(artist) -> Dict[str, Any]:
        missing = []
        if _too_short(artist.bio, ARTIST_MIN_BIO_LENGTH):
            missing.append(f"Add a bio with at least {ARTIST_MIN_BIO_LENGTH} characters.")
        if _is_placeholder(artist.image_url, ARTIST_PLACEHOLDER_IMAGE):
            missing.append("Add a profile photo.")
        if not artist.youtube_video_id:
            missing.append("Add a YouTube performance video.")
        if not artist.plans:
            missing.append("Register at least one show package.")
        return _result(missing)

    @staticmethod
    def check_venue(venue) -> Dict[str, Any]:
        missing = []
        if _too_short(venue.description, VENUE_MIN_DESCRIPTION_LENGTH):
            missing.append(f"Add a description with at least {VENUE_MIN_DESCRIPTION_LENGTH} characters.")
        if _is_placeholder(venue.image_url, VENUE_PLACEHOLDER_IMAGE):
            missing.append("Add a main photo of the venue.")
        if not venue.address or not venue.address.strip():
            missing.append("Fill in the venue address.")
        if not venue.music_styles:
            missing.append("List the music styles the venue usually hosts.")
        return _result(missing)

    @staticmethod
    def check_musician(musician) -> Dict[str, Any]:
        missing = []
        if _too_short(musician.bio, MUSICIAN_MIN_BIO_LENGTH):
            missing.append(f"Add a bio with at least {MUSICIAN_MIN_BIO_LENGTH} characters.")
        if _is_placeholder(musician.image_url, ARTIST_PLACEHOLDER_IMAGE):
            missing.append("Add a profile photo.")
        if not musician.instrument:
            missing.append("Specify your main instrument.")
        if not musician.city:
            missing.append("Tell us the city you play in.")
        return _result(missing)

    @classmethod
    def refresh(cls, profile, check) -> Dict[str, Any]:
        """Recompute and store completeness on a profile row"""
        result = check(profile)
        profile.profile_completeness = result
        profile.is_profile_complete = result["is_complete"]
        return result


profile_completeness_service = ProfileCompletenessService()
