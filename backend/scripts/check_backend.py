#!/usr/bin/env python3
"""
Quick checks so the backend can start. Run from backend/:
  python scripts/check_backend.py
  # add --fetch to also call the upstream API once
"""
import os
import sys
from pathlib import Path

# Run from backend/
backend_dir = Path(__file__).resolve().parent.parent
os.chdir(backend_dir)
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))


def main():
    errors = []

    # 1) .env
    env_file = backend_dir / ".env"
    if not env_file.exists():
        print("WARN backend/.env missing; using defaults (copy .env.example to override)")
    else:
        print("OK  .env exists")

    # 2) Cache backend (sql needs a reachable DATABASE_URL)
    try:
        from hotfeed.config import settings
        from hotfeed.services.cache import list_backends

        if settings.cache_backend not in list_backends():
            errors.append(f"CACHE_BACKEND={settings.cache_backend} unknown; use one of {list_backends()}")
            print("FAIL Cache backend:", settings.cache_backend)
        elif settings.cache_backend == "sql":
            from sqlalchemy import text
            from hotfeed.db.session import engine

            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            print("OK  Database connection (DATABASE_URL)")
        else:
            print("OK  Cache backend:", settings.cache_backend)
    except Exception as e:
        errors.append(f"Cache backend: {e}")
        print("FAIL Cache backend:", e)

    # 3) App import (catches missing deps, bad imports)
    try:
        from hotfeed.main import app  # noqa: F401
        print("OK  App import (hotfeed.main)")
    except Exception as e:
        errors.append(f"App import: {e}")
        print("FAIL App import:", e)
        print("\nFix the above, then run:")
        print("  cd backend && uvicorn hotfeed.main:app --reload --host 0.0.0.0 --port 8000")
        return 1

    # 4) Optional: one upstream call
    if "--fetch" in sys.argv:
        from hotfeed.core.errors import UpstreamError
        from hotfeed.services.ranking import normalize
        from hotfeed.services.upstream import UpstreamClient

        try:
            batches = UpstreamClient().fetch_raw()
            items = normalize(batches)
            print(f"OK  Upstream: {len(batches)} sources, {len(items)} ranked items")
        except UpstreamError as e:
            errors.append(f"Upstream ({e.kind}): {e}")
            print("FAIL Upstream:", e)

    # 5) Port 8000
    try:
        import socket
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("127.0.0.1", 8000))
        print("OK  Port 8000 is free")
    except OSError:
        errors.append("Port 8000 is in use. Stop the other process or use another port (e.g. --port 8001).")

    if errors:
        print("\n" + "\n".join(errors))
        return 1
    print("\nAll checks passed. Start with: uvicorn hotfeed.main:app --reload --port 8000")
    return 0


if __name__ == "__main__":
    sys.exit(main())
