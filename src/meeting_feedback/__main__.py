"""Run the service with uvicorn: ``python -m meeting_feedback``."""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "meeting_feedback.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
