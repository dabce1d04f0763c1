"""Run the API with uvicorn: ``python -m ladybug_api``."""

import os

import uvicorn


def main() -> None:
    uvicorn.run(
        "ladybug_api.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "3000")),
        log_config=None,
    )


if __name__ == "__main__":
    main()
