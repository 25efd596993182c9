"""Exclusion checks protecting devices from deletion."""

from __future__ import annotations

from typing import Iterable, Optional


def is_excluded(device_name: str, exclusions: Iterable[str]) -> bool:
    """Check whether a device name contains any exclusion entry.

    Matching is a case-sensitive substring test; an empty exclusion list
    never matches.

    Args:
        device_name: Device display name
        exclusions: Exclusion substrings

    Returns:
        True if any entry occurs in the name
    """
    return any(exclusion in device_name for exclusion in exclusions)


class ExclusionChecker:
    """Safety checker for device exclusion.

    Attributes:
        exclusions: Exclusion substrings in the order they were given
    """

    def __init__(self, exclusions: Iterable[str]) -> None:
        self.exclusions = tuple(exclusions)

    def is_protected(self, device_name: str) -> tuple[bool, Optional[str]]:
        """Check if a device is protected by an exclusion entry.

        Args:
            device_name: Device display name

        Returns:
            Tuple of (is_protected, matched_entry)
                is_protected: True if the name contains any entry
                matched_entry: First matching entry, None if not protected
        """
        for exclusion in self.exclusions:
            if exclusion in device_name:
                return True, exclusion

        return False, None
