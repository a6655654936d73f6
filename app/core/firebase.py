import logging

from firebase_admin import get_app, initialize_app

from app.core.settings import get_settings

logger = logging.getLogger(__name__)


def init_firebase() -> None:
    """Initialize the Firebase Admin SDK once per process.

    Credentials come from GOOGLE_APPLICATION_CREDENTIALS. STORAGE_BUCKET, when
    set, becomes the default Cloud Storage bucket used for uploads.
    """
    try:
        get_app()
        return
    except ValueError:
        pass

    bucket = get_settings().storage_bucket
    options = {"storageBucket": bucket} if bucket else None
    initialize_app(options=options)
    logger.info("Firebase initialized (bucket: %s)", bucket or "project default")
