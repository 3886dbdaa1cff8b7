# app/core/firebase.py
from functools import lru_cache
from pathlib import Path
import json
import logging

import firebase_admin
from firebase_admin import credentials, firestore
from app.config import settings

logger = logging.getLogger(__name__)


def _load_credentials():
    # 1) Service account JSON from ENV (production)
    if settings.FIREBASE_SERVICE_ACCOUNT_JSON:
        try:
            sa_info = json.loads(settings.FIREBASE_SERVICE_ACCOUNT_JSON)
        except json.JSONDecodeError as e:
            raise RuntimeError(
                "FIREBASE_SERVICE_ACCOUNT_JSON is not valid JSON"
            ) from e
        return credentials.Certificate(sa_info)

    # 2) Fallback to a local file (dev)
    sa_path = Path(settings.GOOGLE_APPLICATION_CREDENTIALS)
    if not sa_path.exists():
        raise RuntimeError(
            f"Firebase service account JSON not found: {sa_path}. "
            f"Set FIREBASE_SERVICE_ACCOUNT_JSON or GOOGLE_APPLICATION_CREDENTIALS."
        )
    return credentials.Certificate(str(sa_path))


@lru_cache(maxsize=1)
def get_firestore():
    """
    Firestore client singleton. Firebase is initialised on first use so the
    application can be imported without credentials.
    """
    if not firebase_admin._apps:
        firebase_admin.initialize_app(
            _load_credentials(),
            {"projectId": settings.FIREBASE_PROJECT_ID},
        )
        logger.info("Firebase app initialised for project %s", settings.FIREBASE_PROJECT_ID)
    return firestore.client()
