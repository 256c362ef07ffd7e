"""Run the API locally with auto-reload: `python dev_backend.py`."""
import os
from pathlib import Path

import uvicorn


ROOT = Path(__file__).resolve().parent


def main() -> None:
    # Reload workers are fresh interpreters; they need the project root importable
    paths = [p for p in os.environ.get("PYTHONPATH", "").split(os.pathsep) if p]
    if str(ROOT) not in paths:
        os.environ["PYTHONPATH"] = os.pathsep.join(paths + [str(ROOT)])

    uvicorn.run(
        "backend.main:app",
        host=os.getenv("ASSET_CONVERTER_HOST", "127.0.0.1"),
        port=int(os.getenv("ASSET_CONVERTER_PORT", "8000")),
        reload=True,
        app_dir=str(ROOT),
        reload_dirs=[str(ROOT / "backend"), str(ROOT / "asset_converter")],
        reload_excludes=["cache/*", "logs/*"],
        log_level="info",
    )


if __name__ == "__main__":
    main()
