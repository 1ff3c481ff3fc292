from __future__ import annotations

"""
Media profiles.

A profile is the user's wish list: quality bounds, seeder bounds, tags that
are mandatory, banned, nice to have or best avoided, and a tie-breaker for
when everything else is a wash. Profiles are validated on load and refuse
to guess what you meant.
"""

import hashlib
import json
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from .matchers import QUALITY_RANKING, TAGS

MOST_SEEDERS = "mostSeeders"
LARGEST_FILE_SIZE = "largestFileSize"
SUPPORTED_SORTS: Tuple[str, ...] = (MOST_SEEDERS, LARGEST_FILE_SIZE)
DEFAULT_SORT = LARGEST_FILE_SIZE

TAG_LIST_FIELDS: Tuple[str, ...] = ("required", "preferred", "discouraged", "forbidden")
_LIMIT_FIELDS = ("quality", "seeders")
_PROFILE_FIELDS = ("name", "sort", "minimum", "maximum", *TAG_LIST_FIELDS)

DEFAULT_PROFILES: List[Dict[str, Any]] = [
    {
        "name": "(example) Most Compatible",
        "maximum": {"quality": "1080p"},
        "discouraged": ["hdr"],
        "forbidden": ["dolbyvision", "h265"],
    },
    {
        "name": "(example) Remux Only",
        "required": ["remux"],
    },
    {
        "name": "(example) High Definition",
        "minimum": {"quality": "720p"},
        "forbidden": ["cam"],
    },
]


class ProfileError(ValueError):
    """Raised when a profile doesn't look like a profile."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def stable_hash(obj: Any) -> str:
    """
    Hash a JSON-friendly structure so equal structures always agree.

    Parameters
    ----------
    obj : Any
        Anything ``json.dumps`` can handle.

    Returns
    -------
    str
        Hex sha256 of the key-sorted JSON rendering.
    """

    payload = json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def _check_unknown_keys(data: Dict[str, Any], allowed: Tuple[str, ...], prefix: str) -> None:
    for key in data:
        if key not in allowed:
            field = f"{prefix}{key}"
            raise ProfileError(field, f"unknown field, expected one of {', '.join(allowed)}")


@dataclass(frozen=True)
class Limits:
    """A lower or upper bound on quality and seeders."""

    quality: Optional[str] = None
    seeders: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any, field: str) -> "Limits":
        """
        Validate a ``minimum``/``maximum`` block.

        Parameters
        ----------
        data : Any
            Raw block from the config file.
        field : str
            Which block this is, for error messages.

        Raises
        ------
        ProfileError
            On anything that isn't a known quality or a positive seeder count.
        """

        if not isinstance(data, dict):
            raise ProfileError(field, "expected an object with optional 'quality' and 'seeders'")
        _check_unknown_keys(data, _LIMIT_FIELDS, f"{field}.")

        quality = data.get("quality")
        if quality is not None and quality not in QUALITY_RANKING:
            raise ProfileError(f"{field}.quality", f"expected one of {', '.join(QUALITY_RANKING)}, got {quality!r}")

        seeders = data.get("seeders")
        if seeders is not None:
            if isinstance(seeders, bool) or not isinstance(seeders, int) or seeders <= 0:
                raise ProfileError(f"{field}.seeders", f"expected a positive integer, got {seeders!r}")

        return cls(quality=quality, seeders=seeders)


def _tag_list(data: Dict[str, Any], field: str) -> Tuple[str, ...]:
    raw = data.get(field)
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ProfileError(field, "expected a list of tags")
    for index, tag in enumerate(raw):
        if tag not in TAGS:
            raise ProfileError(f"{field}[{index}]", f"expected one of {', '.join(TAGS)}, got {tag!r}")
    return tuple(raw)


@dataclass(frozen=True)
class Profile:
    """User-defined policy for picking one torrent out of many."""

    name: str
    sort: str = DEFAULT_SORT
    minimum: Optional[Limits] = None
    maximum: Optional[Limits] = None
    required: Tuple[str, ...] = ()
    preferred: Tuple[str, ...] = ()
    discouraged: Tuple[str, ...] = ()
    forbidden: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "Profile":
        """
        Build a profile from raw configuration data.

        Parameters
        ----------
        data : Any
            A single profile record, straight out of the JSON config.

        Returns
        -------
        Profile
            Validated, immutable profile.

        Raises
        ------
        ProfileError
            Naming the first offending field and what it should have been.
        """

        if not isinstance(data, dict):
            raise ProfileError("profile", "expected an object")
        _check_unknown_keys(data, _PROFILE_FIELDS, "")

        name = data.get("name")
        if not isinstance(name, str):
            raise ProfileError("name", "expected a string")

        sort = data.get("sort", DEFAULT_SORT)
        if sort not in SUPPORTED_SORTS:
            raise ProfileError("sort", f"expected one of {', '.join(SUPPORTED_SORTS)}, got {sort!r}")

        minimum = Limits.from_dict(data["minimum"], "minimum") if data.get("minimum") is not None else None
        maximum = Limits.from_dict(data["maximum"], "maximum") if data.get("maximum") is not None else None

        return cls(
            name=name,
            sort=sort,
            minimum=minimum,
            maximum=maximum,
            required=_tag_list(data, "required"),
            preferred=_tag_list(data, "preferred"),
            discouraged=_tag_list(data, "discouraged"),
            forbidden=_tag_list(data, "forbidden"),
        )

    def fingerprint(self) -> str:
        """Stable hash of this profile, handy as a dedup key."""

        return stable_hash(asdict(self))


def load_profiles(records: Any) -> List[Profile]:
    """
    Validate a list of profile records.

    Raises
    ------
    ProfileError
        With the field path prefixed by ``profiles[i]``.
    """

    if not isinstance(records, list):
        raise ProfileError("profiles", "expected a list of profiles")

    profiles: List[Profile] = []
    for index, record in enumerate(records):
        try:
            profiles.append(Profile.from_dict(record))
        except ProfileError as exc:
            field = f"profiles[{index}].{exc.field}" if exc.field != "profile" else f"profiles[{index}]"
            raise ProfileError(field, exc.message) from exc
    return profiles
