import logging
import threading
import uuid

from fastapi import FastAPI, Request, HTTPException, BackgroundTasks
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")

# Populated at startup
_dictionary = None
_startup_timings: dict = {}

_games: dict = {}
_games_lock = threading.Lock()


class NewGame(BaseModel):
    player: str
    board: list[list[str]] | None = None


class WordSubmission(BaseModel):
    word: str


def _apply_log_level():
    logger.setLevel(logging.DEBUG if settings.DEBUG else logging.INFO)


def _sweep_games():
    """Time out idle games and drop those finished more than FINISHED_GAME_TTL_SECONDS ago."""
    with _games_lock:
        items = list(_games.items())

    stale = []
    for game_id, session in items:
        _expire(session)
        since = session.seconds_since_finish
        if since is not None and since >= settings.FINISHED_GAME_TTL_SECONDS:
            stale.append(game_id)

    if stale:
        with _games_lock:
            for game_id in stale:
                _games.pop(game_id, None)
        logger.info("Evicted %d finished games (%d left)", len(stale), len(_games))


def _game_or_404(game_id: str):
    _sweep_games()
    with _games_lock:
        session = _games.get(game_id)
    if session is None:
        raise HTTPException(404, f"Unknown game: {game_id}")
    _expire(session)
    return session


def _expire(session):
    """Finish a running game once its time is up."""
    limit = settings.GAME_DURATION_SECONDS
    if limit > 0 and not session.is_finished and session.elapsed_seconds >= limit:
        logger.info("Game time is up for player=%s", session.player_name)
        session.finish()


def _remaining_seconds(session) -> int | None:
    limit = settings.GAME_DURATION_SECONDS
    if limit <= 0:
        return None
    if session.is_finished:
        return 0
    return max(0, int(limit - session.elapsed_seconds))


def _game_state(game_id: str, session) -> dict:
    return {
        "id": game_id,
        "player": session.player_name,
        "board": session.board.grid,
        "state": session.state.value,
        "score": session.score,
        "words": session.accepted_words,
        "remaining_seconds": _remaining_seconds(session),
    }


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _dictionary, _startup_timings

        from boggle.loader import load_dictionary
        from boggle.metrics import StageTimer

        _apply_log_level()
        timer = StageTimer("startup")
        logger.info("Loading dictionary from %s", settings.DICTIONARY_PATH)
        with timer.stage("dictionary_load"):
            _dictionary = load_dictionary(settings.DICTIONARY_PATH, settings.load_options())
        _startup_timings = timer.log_summary()
        logger.info("Dictionary loaded (%d words)", _dictionary.size())

        yield

        with _games_lock:
            _games.clear()

    application = FastAPI(title="Boggle", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": _dictionary is not None,
            "dictionary_size": _dictionary.size() if _dictionary is not None else 0,
            "startup_timings": _startup_timings,
        }

    @application.post("/games")
    async def new_game(body: NewGame):
        from boggle.board import board_from_preset
        from boggle.session import Session

        if _dictionary is None:
            raise HTTPException(503, "Dictionary not loaded")

        _sweep_games()

        # InvalidBoardError and bad player names are both ValueErrors
        try:
            board = board_from_preset(body.board) if body.board is not None else None
            session = Session(body.player, _dictionary, board, min_word_length=settings.MIN_WORD_LENGTH)
        except ValueError as e:
            raise HTTPException(400, str(e))

        session.start()
        game_id = uuid.uuid4().hex
        with _games_lock:
            _games[game_id] = session
        logger.info("New game %s for player=%s", game_id, session.player_name)
        return _game_state(game_id, session)

    @application.get("/games/{game_id}")
    async def get_game(game_id: str):
        return _game_state(game_id, _game_or_404(game_id))

    @application.post("/games/{game_id}/words")
    async def submit_word(game_id: str, body: WordSubmission):
        from boggle.session import SessionFinishedError

        session = _game_or_404(game_id)
        try:
            outcome = session.submit_word(body.word)
        except SessionFinishedError as e:
            raise HTTPException(409, str(e))

        return {
            "status": outcome.status.value,
            "word": outcome.normalized,
            "points": outcome.points,
            "score": session.score,
            "path": session.reconstruct_path(outcome.normalized) if outcome.is_ok else None,
        }

    @application.get("/games/{game_id}/path/{word}")
    async def word_path(game_id: str, word: str):
        session = _game_or_404(game_id)
        return {"word": word, "path": session.reconstruct_path(word)}

    @application.post("/games/{game_id}/finish")
    async def finish_game(game_id: str, background_tasks: BackgroundTasks):
        from boggle.metrics import StageTimer
        from boggle.notifier import send_game_summary

        session = _game_or_404(game_id)
        session.finish()
        summary = session.summary()

        timer = StageTimer(f"game {game_id}")
        with timer.stage("solve"):
            missed = session.remaining_words(settings.MAX_RESULTS)
        timings = timer.log_summary(logging.DEBUG)

        if settings.NTFY_TOPIC:
            background_tasks.add_task(send_game_summary, summary, settings.NTFY_TOPIC, settings.NTFY_URL)

        return JSONResponse({
            "id": game_id,
            "player": summary.player_name,
            "score": summary.score,
            "words": summary.words,
            "last_played": summary.last_played.isoformat() if summary.last_played else None,
            "missed_words": missed,
            "processing_time": timings["total"],
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle.settings import update_settings, get_editable_settings
        body = await request.json()
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        _apply_log_level()
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()
