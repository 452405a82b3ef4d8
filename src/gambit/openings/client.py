"""Client for a Lichess-compatible opening explorer.

Lookups are purely informational: every failure is logged and reported as
``None`` so the game never waits on or breaks because of the network.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import requests

from gambit.config import OpeningSettings
from gambit.openings.models import OpeningStats

_LOGGER = logging.getLogger(__name__)

_USER_AGENT = "gambit-chess/0.1"


class OpeningExplorerClient:
    """Fetches game statistics for a sequence of UCI moves."""

    def __init__(
        self,
        settings: OpeningSettings | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings or OpeningSettings()
        self.session = session or requests.Session()
        self.session.headers.update(
            {"Accept": "application/json", "User-Agent": _USER_AGENT}
        )

    def should_lookup(self, uci_moves: Sequence[str], game_over: bool = False) -> bool:
        """Whether a lookup makes sense for this history."""
        return (
            self.settings.enabled
            and not game_over
            and 0 < len(uci_moves) <= self.settings.max_plies
        )

    def lookup(
        self, uci_moves: Sequence[str], *, game_over: bool = False
    ) -> OpeningStats | None:
        """Statistics for the position reached by *uci_moves*, or ``None``."""
        if not self.should_lookup(uci_moves, game_over):
            return None

        params = {
            "variant": self.settings.variant,
            "speeds": ",".join(self.settings.speeds),
            "ratings": ",".join(str(r) for r in self.settings.ratings),
            "play": ",".join(uci_moves),
        }
        try:
            response = self.session.get(
                self.settings.base_url, params=params, timeout=self.settings.timeout_s
            )
            response.raise_for_status()
            return OpeningStats.from_payload(response.json())
        except requests.exceptions.HTTPError as exc:
            if exc.response is not None and exc.response.status_code == 400:
                _LOGGER.info("Opening explorer has no data for %s", params["play"])
            else:
                _LOGGER.warning("Opening explorer HTTP error: %s", exc)
            return None
        except requests.exceptions.RequestException as exc:
            _LOGGER.warning("Opening explorer request failed: %s", exc)
            return None
        except (KeyError, TypeError, ValueError) as exc:
            _LOGGER.warning("Opening explorer returned unexpected data: %s", exc)
            return None

    def close(self) -> None:
        self.session.close()
