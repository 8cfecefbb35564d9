import os


def main() -> None:
    """Launch Gunicorn with uvicorn workers for local runs.

    Each worker builds its own store pool and cache client in the app
    lifespan, so nothing is connected before Gunicorn forks.
    """

    host = os.getenv("HOST", "0.0.0.0")
    port = os.getenv("PORT", "8080")
    reload = os.getenv("RELOAD", "false").lower() == "true"

    workers_env = os.getenv("WORKERS")

    cmd = [
        "gunicorn",
        "app.main:app",
        "-k",
        "uvicorn.workers.UvicornWorker",
        "--bind",
        f"{host}:{port}",
        "--log-level",
        "info",
    ]

    if reload:
        cmd.append("--reload")

    if workers_env and workers_env.isdigit():
        cmd.extend(["--workers", workers_env])

    os.execvp(cmd[0], cmd)


if __name__ == "__main__":
    main()
