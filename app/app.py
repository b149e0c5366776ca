"""
FastAPI application serving course search over a fixed in-memory corpus.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

The corpus (data/courses.json) is loaded once at startup and injected into
the ranking engine; see engine/ranking.py for the scoring rules.

Endpoints:
    GET /api/search?q=...
        returns: JSON array of courses (id, title, description, category,
                 price, instructor), best match first, at most 50.
        errors:  {"error": str} with 400 (missing q) or 500 (bad corpus).
    GET /health
        returns: {"status": "ok", "courses": int}

Logs each query and wall-clock response time to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import logging
import logging.handlers
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from engine.config import API_HOST, API_PORT, CACHE_CONTROL, LOG_DIR, LOG_FILE
from engine.corpus import CorpusError, load_corpus
from engine.ranking import RankingEngine


def _setup_logging() -> None:
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")

MISSING_QUERY_ERROR = 'Query parameter "q" is required and must be a string'
CORPUS_ERROR        = "Internal server error: Invalid data structure"
INTERNAL_ERROR      = "Internal server error"


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

_engine: RankingEngine | None = None


@asynccontextmanager
async def lifespan(_: FastAPI):
    global _engine

    log.info("Loading course corpus…")
    try:
        _engine = RankingEngine(load_corpus())
        log.info("  %d courses ready.", len(_engine))
    except (CorpusError, FileNotFoundError) as exc:
        # searches answer 500 until the data file is fixed
        log.error("  Corpus could not be loaded: %s", exc)
        _engine = None

    yield  # server runs here


app = FastAPI(title="Course Search", lifespan=lifespan)


def get_engine() -> RankingEngine | None:
    return _engine


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/api/search")
def search(q: str | None = None, engine: RankingEngine | None = Depends(get_engine)):
    if q is None:
        return _error(MISSING_QUERY_ERROR, 400)

    if not q.strip():
        return JSONResponse([])

    t0 = time.perf_counter()
    try:
        if engine is None:
            raise CorpusError("corpus was not loaded")
        results = engine.search(q)
    except CorpusError as exc:
        log.error("query=%r  corpus error: %s", q, exc)
        return _error(CORPUS_ERROR, 500)
    except Exception:
        log.exception("query=%r  search failed", q)
        return _error(INTERNAL_ERROR, 500)

    elapsed = time.perf_counter() - t0
    log.info("query=%r  hits=%d  %.4fs", q, len(results), elapsed)

    response = JSONResponse([r.model_dump() for r in results])
    response.headers["Cache-Control"] = CACHE_CONTROL
    return response


@app.get("/health")
def health(engine: RankingEngine | None = Depends(get_engine)):
    if engine is None:
        return JSONResponse({"status": "unavailable"}, status_code=503)
    return {"status": "ok", "courses": len(engine)}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    log.info("=== Course Search — launching server on http://%s:%d ===", API_HOST, API_PORT)
    uvicorn.run(app, host=API_HOST, port=API_PORT, reload=False)
