# newwork-server/newwork/db/session.py
from fastapi import Request

from newwork.db.store import Database


def get_db(request: Request) -> Database:
    return request.app.state.db
