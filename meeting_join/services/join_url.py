# meeting_join/services/join_url.py
from __future__ import annotations

import base64
from typing import Optional
from urllib.parse import quote, urlencode

from meeting_join.schemas.join import AuthenticatedIdentity, GuestIdentity


class JoinUrlBuilder:
    """
    Decorates a provider join URL with the participant's display name.

    Two query parameters are appended:
    - `uname`: the display name, percent-encoded (spaces as %20)
    - `un`:    base64 of the display name's UTF-8 bytes (legacy provider parameter)

    Calling `build` on an already decorated URL appends a second pair;
    callers build each rendered link exactly once.
    """

    @staticmethod
    def display_name(identity: AuthenticatedIdentity | GuestIdentity | None) -> str:
        """
        Name shown to other participants.

        Guests with an organization render as "Name (Organization)".
        Authenticated users always render with their name only.
        """
        if identity is None or not (identity.name or "").strip():
            return ""

        organization = identity.organization if isinstance(identity, GuestIdentity) else None
        if organization:
            return f"{identity.name} ({organization})"
        return identity.name

    @staticmethod
    def encode_name(display_name: str) -> str:
        return base64.b64encode(display_name.encode("utf-8")).decode("ascii")

    @staticmethod
    def build(
        base_join_url: Optional[str],
        identity: AuthenticatedIdentity | GuestIdentity | None,
    ) -> Optional[str]:
        """
        Append `uname`/`un` to `base_join_url`.

        Returns `base_join_url` unchanged when it is empty or when the
        identity has no usable name (e.g. a guest who has not typed one yet).
        """
        if not base_join_url:
            return base_join_url

        display_name = JoinUrlBuilder.display_name(identity)
        if not display_name:
            return base_join_url

        query = urlencode(
            {
                "uname": display_name,
                "un": JoinUrlBuilder.encode_name(display_name),
            },
            quote_via=quote,
        )
        separator = "&" if "?" in base_join_url else "?"
        return f"{base_join_url}{separator}{query}"
