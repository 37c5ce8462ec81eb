import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from livescribe.api.routes.chat import router as chat_router
from livescribe.api.routes.live import router as live_router
from livescribe.api.routes.meetings import router as meetings_router
from livescribe.api.routes.speakers import router as speakers_router
from livescribe.api.routes.transcriptions import router as transcriptions_router
from livescribe.config import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="LiveScribe API",
    description="Live meeting transcription with automatic question answering",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(meetings_router)
app.include_router(transcriptions_router)
app.include_router(speakers_router)
app.include_router(chat_router)
app.include_router(live_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
