"""
Google Authentication Service (Singleton)

Service-account credentials for Firestore, and verification of the
identity tokens sent by the frontend.
"""
import os
import json
import logging
from typing import Any, Dict, Optional

import google.auth.exceptions
from google.auth.transport import requests as google_requests
from google.cloud import firestore
from google.oauth2 import id_token, service_account

from expense_tracker.core.config import (
    AUTH_AUDIENCE,
    AUTH_CERTS_URL,
    AUTH_ISSUER,
    FIREBASE_CREDENTIALS,
    FIRESTORE_PROJECT,
)
from expense_tracker.core.exceptions import AuthenticationError, FirestoreError

logger = logging.getLogger(__name__)


class GoogleAuth:
    """Credentials, Firestore client and identity tokens for the service"""

    SCOPES = ['https://www.googleapis.com/auth/datastore']
    KEY_FILE = "firebase-key.json"

    _credentials = None
    _firestore_client = None
    _request = None

    @classmethod
    def get_credentials(cls) -> Optional[service_account.Credentials]:
        """
        Service-account credentials (singleton).
        None means application default credentials are used instead.
        """
        if cls._credentials:
            return cls._credentials

        try:
            if FIREBASE_CREDENTIALS:
                creds_dict = json.loads(FIREBASE_CREDENTIALS)
                cls._credentials = service_account.Credentials.from_service_account_info(
                    creds_dict, scopes=cls.SCOPES
                )
            elif os.path.exists(cls.KEY_FILE):
                cls._credentials = service_account.Credentials.from_service_account_file(
                    cls.KEY_FILE, scopes=cls.SCOPES
                )
        except (ValueError, google.auth.exceptions.GoogleAuthError) as e:
            logger.error(f"Invalid service account credentials: {e}")
            raise FirestoreError("Invalid service account credentials") from e

        return cls._credentials

    @classmethod
    def get_firestore_client(cls) -> firestore.Client:
        """Firestore client (singleton)"""
        if cls._firestore_client:
            return cls._firestore_client

        creds = cls.get_credentials()
        try:
            if creds:
                cls._firestore_client = firestore.Client(
                    project=FIRESTORE_PROJECT or creds.project_id, credentials=creds
                )
            else:
                cls._firestore_client = firestore.Client(project=FIRESTORE_PROJECT)
        except google.auth.exceptions.DefaultCredentialsError as e:
            logger.error(f"Firestore not available: {e}")
            raise FirestoreError("Firestore not available") from e

        return cls._firestore_client

    @classmethod
    def verify_identity_token(cls, token: str) -> Dict[str, Any]:
        """
        Verifies signature, expiry and audience of an identity token and
        returns its claims. The issuer is checked when AUTH_ISSUER is set.
        """
        if not token:
            raise AuthenticationError("Missing identity token")

        if cls._request is None:
            cls._request = google_requests.Request()

        try:
            claims = id_token.verify_token(
                token, cls._request, audience=AUTH_AUDIENCE, certs_url=AUTH_CERTS_URL
            )
        except Exception as e:
            # google-auth raises ValueError, the JWKS path raises PyJWT errors
            logger.warning(f"Identity token rejected: {e}")
            raise AuthenticationError("Invalid token") from e

        if AUTH_ISSUER and claims.get("iss") != AUTH_ISSUER:
            logger.warning(f"Identity token from unexpected issuer: {claims.get('iss')}")
            raise AuthenticationError("Invalid token issuer")

        return claims
