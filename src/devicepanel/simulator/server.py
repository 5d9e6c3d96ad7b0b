"""REST API server that imitates the companion device.

Serves the same five endpoints as the board's firmware from in-memory
state, so the console can be developed and exercised without hardware.

    GET  /health        -> {"status": "ok"}
    GET  /api/status    -> full trainer status object
    GET  /api/stats     -> {"sessions": ..., "characters": ..., "bestWPM": ...}
    POST /api/stats     <- {"reset": true}
    GET  /api/control   -> {"lastCmd": "..."}
    POST /api/control   <- {"cmd": "PING"}
"""

from __future__ import annotations

import logging
from typing import Any

import uvicorn
from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# The firmware keeps the last command in a 64-byte C string.
MAX_LAST_CMD = 63


# ---------------------------------------------------------------------------
# Device state
# ---------------------------------------------------------------------------

class DeviceState(BaseModel):
    """Trainer status as reported by the device, in firmware field order."""

    lesson: int = 0
    frequency: int = 600
    speed: int = 20
    effective_speed: int = Field(default=13, alias="effectiveSpeed")
    accuracy: float = 0.0
    decoder_enabled: bool = Field(default=False, alias="decoderEnabled")
    koch_mode: bool = Field(default=False, alias="kochMode")
    current_text: str = Field(default="", alias="currentText")
    decoded_text: str = Field(default="", alias="decodedText")
    sessions: int = 0
    characters: int = 0
    best_wpm: float = Field(default=0.0, alias="bestWPM")
    waveform: str = "Sine"
    output: str = "Headphones"
    sending: bool = False
    listening: bool = False

    last_cmd: str = Field(default="", exclude=True)
    command_log: list[str] = Field(default_factory=list, exclude=True)

    model_config = {"populate_by_name": True, "validate_assignment": True}

    def status(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def stats(self) -> dict[str, Any]:
        return {
            "sessions": self.sessions,
            "characters": self.characters,
            "bestWPM": self.best_wpm,
        }

    def reset(self) -> None:
        """Restore trainer defaults. The last command survives a reset."""
        defaults = DeviceState()
        for name in type(self).model_fields:
            if name in ("last_cmd", "command_log"):
                continue
            setattr(self, name, getattr(defaults, name))

    def record_command(self, cmd: str) -> None:
        self.last_cmd = cmd[:MAX_LAST_CMD]
        self.command_log.append(cmd)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(state: DeviceState | None = None) -> FastAPI:
    """Create the simulated device application.

    Args:
        state: Optional pre-populated device state (for testing).
    """
    app = FastAPI(
        title="devicepanel simulator",
        description="Imitation of the companion device's JSON API",
        version="0.1.0",
    )
    app.state.device = state if state is not None else DeviceState()

    def _device() -> DeviceState:
        return app.state.device

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/status")
    async def get_status() -> dict[str, Any]:
        return _device().status()

    @app.get("/api/stats")
    async def get_stats() -> dict[str, Any]:
        return _device().stats()

    @app.post("/api/stats")
    async def post_stats(body: dict[str, Any] = Body(...)) -> dict[str, bool]:
        # Only a literal boolean true resets, as on the device
        if body.get("reset") is True:
            _device().reset()
            logger.info("Stats reset")
        return {"ok": True}

    @app.get("/api/control")
    async def get_control() -> dict[str, str]:
        return {"lastCmd": _device().last_cmd}

    @app.post("/api/control")
    async def post_control(body: dict[str, Any] = Body(...)) -> dict[str, bool]:
        cmd = body.get("cmd")
        if not isinstance(cmd, str):
            raise HTTPException(status_code=400, detail="Missing 'cmd' string")
        _device().record_command(cmd)
        logger.info("Command received: %s", cmd)
        return {"ok": True}

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(host: str = "127.0.0.1", port: int = 8080) -> None:
    """Run the simulated device."""
    app = create_app()
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
