import os
import sys
import json
import requests

BASE_URL = os.environ.get("SMOKE_URL") or os.environ.get("DEV_URL", "http://127.0.0.1:5002")
API = f"{BASE_URL.rstrip('/')}/api"
TOKEN = os.environ.get("SMOKE_TOKEN", "")
FILE_PATH = os.environ.get("SMOKE_FILE_PATH", "")


def headers():
    return {"Authorization": f"Bearer {TOKEN}"} if TOKEN else {}


def get(path: str):
    r = requests.get(f"{API}{path}", headers=headers(), timeout=10)
    r.raise_for_status()
    return r


def post(path: str, payload: dict, timeout: int = 20):
    r = requests.post(f"{API}{path}", json=payload, headers=headers(), timeout=timeout)
    r.raise_for_status()
    return r


def main():
    print(f"[smoke] Target: {API}")
    print("[smoke] /health:", get("/health").status_code)
    print("[smoke] /version:", get("/version").status_code)

    if not TOKEN:
        print("[smoke] SMOKE_TOKEN not set; skipping authenticated endpoints")
        return

    cell = "TAP A / TAP G / GWP1\nOWN\nOUT\n10/23\n10/24"
    r = post("/court-reports/decompose", {"text": cell})
    print("[smoke] /court-reports/decompose:", r.status_code, json.dumps(r.json()["session"]))

    print("[smoke] /registry:", get("/registry").json())

    if FILE_PATH:
        r = post("/court-reports/extract", {"filePath": FILE_PATH, "enrich": True}, timeout=240)
        data = r.json()["extracted_data"]
        print("[smoke] /court-reports/extract:", r.status_code,
              f"{len(data['entries'])} parts, report_date={data.get('report_date')}")
    else:
        print("[smoke] SMOKE_FILE_PATH not set; skipping extraction")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        print("[smoke] FAILED:", e)
        sys.exit(1)
