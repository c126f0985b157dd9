#!/usr/bin/env python3
"""
Health Image Analyzer Startup Script
Prepare the database, optionally load a provider catalog, and start the API
"""
import argparse
import json
import os
import subprocess
import sys
from pathlib import Path


def seed_providers(path: Path) -> int:
    """Load healthcare providers from a JSON list into the catalog table"""
    from health_analyzer.db import init_db, session_scope
    from health_analyzer.models.db_models import HealthcareProvider

    init_db()
    entries = json.loads(path.read_text(encoding="utf-8"))
    with session_scope() as db:
        for entry in entries:
            db.add(HealthcareProvider(
                name=entry["name"],
                specialty=entry["specialty"],
                location=entry.get("location"),
                contact=entry.get("contact"),
                website=entry.get("website"),
            ))
    return len(entries)


def start_backend(port: int, reload: bool):
    """Start the backend server"""
    print("🚀 Starting Health Image Analyzer API...")
    print(f"📍 Available at: http://localhost:{port}")
    print(f"📚 API Documentation: http://localhost:{port}/docs")
    print("-" * 50)

    backend_cmd = [
        sys.executable, "-m", "uvicorn",
        "health_analyzer.app:app",
        "--host", "0.0.0.0",
        "--port", str(port),
    ]
    if reload:
        backend_cmd.append("--reload")

    return subprocess.Popen(backend_cmd)


def main():
    parser = argparse.ArgumentParser(description="Run the Health Image Analyzer API")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8002")))
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--seed-providers", type=Path, help="JSON file with healthcare providers to load first")
    args = parser.parse_args()

    if not Path("health_analyzer/app.py").exists():
        print("❌ Error: Please run this script from the project root directory")
        sys.exit(1)

    if args.seed_providers:
        count = seed_providers(args.seed_providers)
        print(f"✓ Loaded {count} healthcare providers")

    process = start_backend(args.port, args.reload)
    try:
        process.wait()
    except KeyboardInterrupt:
        print("\n🛑 Stopping API...")
        process.terminate()
        try:
            process.wait(timeout=5)
            print("✅ API stopped")
        except subprocess.TimeoutExpired:
            process.kill()
            print("🔥 API force stopped")


if __name__ == "__main__":
    main()
