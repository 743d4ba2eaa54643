#!/usr/bin/env python3
"""
Issues a dev bearer token signed with AUTH_JWT_SIGNING.
Usage: scripts/issue_dev_token.py [user_id] [email]
"""
import os
import sys

from cardstack.identity.jwt_service import JwtService

SECRET = os.getenv("AUTH_JWT_SIGNING", "dev-jwt-secret-1234")


def issue_token(user_id: str, email: str) -> str:
    return JwtService(SECRET).issue_token({"sub": user_id, "email": email})


if __name__ == "__main__":
    user_id = sys.argv[1] if len(sys.argv) > 1 else "dev-user-001"
    email = sys.argv[2] if len(sys.argv) > 2 else "dev@local.test"
    print(issue_token(user_id, email))
