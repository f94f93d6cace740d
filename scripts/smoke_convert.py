import json
import os
import sys

from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app

"""Smoke script for the convert / swap flow.

Runs one USD -> PHP conversion of 100 against the configured provider
(EXCHANGE_RATE_PROVIDER, default 'static' here so it works offline), swaps the
pair, and prints every intermediate session view.

NOTE: This is a lightweight diagnostic and not a formal test.
"""


def run():
    settings = Settings(
        exchange_rate_provider=os.environ.get("EXCHANGE_RATE_PROVIDER", "static")
    )
    out = {}
    with TestClient(create_app(settings_override=settings)) as client:
        sid = client.post("/sessions").json()["session_id"]
        out["amount"] = client.put(f"/sessions/{sid}/amount", json={"amount": 100}).json()
        resp = client.post(f"/sessions/{sid}/convert")
        out["convert"] = {"status_code": resp.status_code, "body": resp.json()}
        out["swap"] = client.post(f"/sessions/{sid}/swap").json()
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
