import logging
from collections import Counter

import httpx

from boggle.session import GameSummary

logger = logging.getLogger("boggle")


def format_summary(summary: GameSummary) -> tuple[str, str]:
    """Build the (title, body) pair for a finished game."""
    title = f"Boggle - {summary.player_name}: {summary.score} pts"

    by_length = Counter(len(w) for w in summary.words)
    counts = " | ".join(f"{length}L:{n}" for length, n in sorted(by_length.items()))
    played = summary.last_played.isoformat() if summary.last_played else "-"
    body = ",".join(summary.words) + "\n\n" + (counts or "no words") + f"\nplayed {played}"
    return title, body


async def send_game_summary(
    summary: GameSummary,
    topic: str,
    ntfy_url: str = "https://ntfy.sh",
):
    """Send a finished game's summary to ntfy.sh. Best-effort: failures are logged, not raised."""
    try:
        title, body = format_summary(summary)

        async with httpx.AsyncClient(timeout=10.0) as client:
            resp = await client.post(
                f"{ntfy_url}/{topic}",
                content=body.encode("utf-8"),
                headers={
                    "Title": title,
                    "Priority": "default",
                    "Tags": "game_die",
                },
            )
            resp.raise_for_status()
            logger.info("Notification sent to %s/%s (status %d)", ntfy_url, topic, resp.status_code)

    except Exception as e:
        logger.error("Failed to send notification: %s", e)
