#!/usr/bin/env python3
"""
Seed script: registers users and creates todos through the HTTP API (no direct DB).
Run with the API up:
  python scripts/seed_data.py
  python scripts/seed_data.py --users 5 --todos-per-user 20
"""

import argparse
import random

import httpx

API_BASE = "http://localhost:8000"

TASKS = [
    "Buy milk", "Walk dog", "Pay rent", "Call mom", "Book dentist",
    "Water plants", "Renew passport", "Clean garage", "Read a chapter",
    "Fix bike tyre", "Plan weekend trip", "Reply to emails", "Back up laptop",
    "Return library books", "Order groceries", "Change bed sheets",
]


def main():
    ap = argparse.ArgumentParser(description="Seed users and todos via API")
    ap.add_argument("--users", type=int, default=3, help="Number of users to create")
    ap.add_argument("--todos-per-user", type=int, default=10, help="Todos per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    created_todos = 0
    errors = []

    for i in range(args.users):
        email = f"user{i+1}@example.com"
        password = "password123"
        # Fresh client per user: each gets its own session cookie
        with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
            try:
                r = client.post("/auth/register", json={
                    "email": email,
                    "password": password,
                    "name": f"User {i+1}",
                })
                if r.status_code == 400:
                    # Already exists - log in with the same credentials
                    r = client.post("/auth/login", json={"email": email, "password": password})
                if r.status_code != 200:
                    errors.append(f"Auth {email}: {r.status_code} {r.text[:80]}")
                    continue
                for _ in range(args.todos_per_user):
                    r2 = client.post("/api/todos", json={"text": random.choice(TASKS)})
                    if r2.status_code == 200:
                        created_todos += 1
                    else:
                        errors.append(f"Todo {email}: {r2.status_code}")
            except httpx.HTTPError as e:
                errors.append(f"User {email}: {e}")
        print(f"  {email}: done (total todos so far: {created_todos})")

    print(f"\nDone. Users: {args.users}, Todos created: {created_todos}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)


if __name__ == "__main__":
    main()
