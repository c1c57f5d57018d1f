from fastapi import Request

from app.database.connector import DatabaseConnector


def get_connector(request: Request) -> DatabaseConnector:
    return request.app.state.connector


def get_db(request: Request):
    db = get_connector(request).session()
    try:
        yield db
    finally:
        db.close()
