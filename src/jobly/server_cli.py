"""CLI entry point for the Jobly API server."""

import argparse
import os


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="jobly-server",
        description="Jobly API server: companies and job postings",
    )
    parser.add_argument("--host", default=None, help="Bind host (default: JOBLY_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, default=None, help="Bind port (default: JOBLY_PORT or 3001)")
    parser.add_argument(
        "--local",
        action="store_true",
        help="Local dev mode: SQLite database file in the working directory",
    )
    args = parser.parse_args(argv)

    if args.local:
        os.environ["JOBLY_LOCAL_MODE"] = "1"

    import uvicorn

    # Imported after the environment is set so --local is honoured
    from jobly.config import settings

    uvicorn.run(
        "jobly.main:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
    )


if __name__ == "__main__":
    main()
