#!/usr/bin/env python3
"""
Simple Diet Tracker Quickstart — register → login → record → list → delete.

Run with: python examples/quickstart.py

Requires: pip install httpx
Backend must be running (dietracker serve) and pointed at a live
identity service (DIETRACKER_IDENTITY_URL).
"""

import sys
import uuid
from datetime import date

import httpx

BASE = "http://localhost:8080"


def main():
    run_id = uuid.uuid4().hex[:8]
    email = f"demo-{run_id}@example.com"
    password = "demo-password-123"
    client = httpx.Client(base_url=BASE, timeout=10)

    # ── Health check ──────────────────────────────────────────────
    print("Checking backend health...")
    try:
        resp = client.get("/health")
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        print("Start it with:  dietracker migrate && dietracker serve")
        sys.exit(1)
    print(f"  Database: {resp.json().get('database')}")

    # ── Register + login ──────────────────────────────────────────
    print(f"\n1. Registering {email}...")
    resp = client.post("/accounts/registration", json={"email": email, "password": password})
    assert resp.status_code == 201, f"Failed: {resp.status_code} {resp.text}"

    print("\n2. Logging in...")
    resp = client.post("/accounts/login", json={"email": email, "password": password})
    assert resp.status_code == 200, f"Failed: {resp.status_code} {resp.text}"
    client.headers["Authorization"] = f"Bearer {resp.json()['token']}"

    account = client.get("/accounts/me").json()
    print(f"   Account #{account['id']} — daily limit {account['daily_limit']} kcal")

    # ── Record today's meals ──────────────────────────────────────
    today = date.today().isoformat()
    print(f"\n3. Recording meals for {today}...")
    ids = []
    for meal, kcal in [("breakfast", 450), ("lunch", 700), ("dinner", 650)]:
        resp = client.post("/records", json={"value": kcal, "date_record": today})
        assert resp.status_code == 201, f"Failed: {resp.text}"
        ids.append(resp.json()["id"])
        print(f"   {meal:<10} {kcal:>4} kcal  (record {ids[-1]})")

    # ── List ──────────────────────────────────────────────────────
    records = client.get("/records", params={"date": today}).json()
    total = sum(r["value"] for r in records)
    print(f"\n4. {len(records)} records, {total}/{account['daily_limit']} kcal")

    # ── Delete ────────────────────────────────────────────────────
    print(f"\n5. Deleting record {ids[0]}...")
    resp = client.delete(f"/records/{ids[0]}")
    assert resp.status_code == 204
    records = client.get("/records", params={"date": today}).json()
    print(f"   {len(records)} records left")


if __name__ == "__main__":
    main()
