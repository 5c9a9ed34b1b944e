"""Seed demo companies and jobs through the API.

Creates (idempotent):
  1. Companies anderson-arias-morrow, bauer-gallagher, watson-davis
  2. Two jobs per company, skipped when a job with the same title exists

Requires a running server with token issuing enabled:
    JOBLY_LOCAL_MODE=1 JOBLY_ALLOW_TOKEN_ISSUE=1 jobly-server --port 3001

Usage:
    python scripts/seed_jobly.py [--api-url http://localhost:3001/api/v1]
"""

import argparse
import sys

import httpx

COMPANIES = [
    {
        "handle": "anderson-arias-morrow",
        "name": "Anderson, Arias and Morrow",
        "description": "Somebody program how I. Face give away discussion view act inside.",
        "numEmployees": 245,
        "logoUrl": None,
    },
    {
        "handle": "bauer-gallagher",
        "name": "Bauer-Gallagher",
        "description": "Difficult ready trip question produce produce someone.",
        "numEmployees": 862,
        "logoUrl": None,
    },
    {
        "handle": "watson-davis",
        "name": "Watson-Davis",
        "description": "Year join loss.",
        "numEmployees": 819,
        "logoUrl": None,
    },
]

JOBS = [
    {"title": "Conservator, furniture", "salary": 110000, "equity": "0", "companyHandle": "watson-davis"},
    {"title": "Information officer", "salary": 200000, "equity": "0", "companyHandle": "watson-davis"},
    {"title": "Consulting civil engineer", "salary": 60000, "equity": "0", "companyHandle": "bauer-gallagher"},
    {"title": "Early years educator", "salary": 55000, "equity": "0", "companyHandle": "bauer-gallagher"},
    {"title": "Paediatric nurse", "salary": 174000, "equity": "0.082", "companyHandle": "anderson-arias-morrow"},
    {"title": "Systems developer", "salary": 115000, "equity": "0.04", "companyHandle": "anderson-arias-morrow"},
]


def main(api_url: str) -> None:
    client = httpx.Client(base_url=api_url, timeout=15.0)
    print(f"Jobly API: {api_url}")

    r = client.post("/auth/token", json={"username": "seed", "isAdmin": True})
    if r.status_code != 201:
        print(f"ERROR: cannot get admin token ({r.status_code}); set JOBLY_ALLOW_TOKEN_ISSUE=1", file=sys.stderr)
        sys.exit(1)
    client.headers["Authorization"] = f"Bearer {r.json()['token']}"

    print("1. Companies...")
    for company in COMPANIES:
        r = client.get(f"/companies/{company['handle']}")
        if r.status_code == 200:
            print(f"   -> {company['handle']} exists, skipping.")
            continue
        r = client.post("/companies", json=company)
        if r.status_code != 201:
            print(f"   ERROR: {r.status_code} {r.text}", file=sys.stderr)
            sys.exit(1)
        print(f"   -> Created: {company['handle']}")

    print("2. Jobs...")
    for job in JOBS:
        r = client.get("/jobs", params={"title": job["title"], "companyHandle": job["companyHandle"]})
        if r.json()["jobs"]:
            print(f"   -> '{job['title']}' exists, skipping.")
            continue
        r = client.post("/jobs", json=job)
        if r.status_code != 201:
            print(f"   ERROR: {r.status_code} {r.text}", file=sys.stderr)
            sys.exit(1)
        print(f"   -> Created job {r.json()['job']['id']}: {job['title']}")

    print("Done.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed Jobly with demo companies and jobs")
    parser.add_argument("--api-url", default="http://localhost:3001/api/v1")
    args = parser.parse_args()
    main(args.api_url)
