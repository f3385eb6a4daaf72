#!/usr/bin/env python3
"""
Serve the in-memory mock insurance backend over HTTP.

  python scripts/run_mock_backend.py --port 8080            # enveloped responses
  python scripts/run_mock_backend.py --port 8080 --bare     # bare entities/arrays

Then point the console at it:
  INSURANCE_API_BASE_URL=http://localhost:8080/api python scripts/run_console.py policies list
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import uvicorn

from src.api.mock_backend import create_mock_backend_app
from src.integrations.clients.mocks.insurance_backend import InMemoryInsuranceBackend, seed_demo_data


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the mock insurance REST backend")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--bare", action="store_true", help="Return bare entities instead of {data, message, success}")
    parser.add_argument("--empty", action="store_true", help="Start without demo data")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    backend = InMemoryInsuranceBackend()
    if not args.empty:
        seed_demo_data(backend)
    app = create_mock_backend_app(backend, envelope=not args.bare)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
