import os
import json
import logging
from typing import List, Dict, Optional
from firebase_admin import credentials, messaging, initialize_app
from firebase_admin.exceptions import FirebaseError

logger = logging.getLogger(__name__)

INVALID_TOKEN_CODES = {"NOT_FOUND", "INVALID_ARGUMENT", "UNREGISTERED"}


class FCMService:
    """Realtime push over Firebase Cloud Messaging"""

    def __init__(self):
        self.app = None
        self._initialize_firebase()

    def _initialize_firebase(self):
        if self.app is not None:
            return

        try:
            firebase_config = os.getenv("FIREBASE_CONFIG")

            if not firebase_config:
                firebase_config_path = os.getenv(
                    "FIREBASE_CONFIG_PATH", "firebase-service-account.json"
                )
                if not os.path.exists(firebase_config_path):
                    logger.warning(
                        f"FIREBASE_CONFIG not set and {firebase_config_path} not found, "
                        f"push notifications disabled"
                    )
                    return
                logger.info(f"Loading Firebase config from file: {firebase_config_path}")
                with open(firebase_config_path, "r") as f:
                    config_dict = json.load(f)
            else:
                config_dict = json.loads(firebase_config)

            self.app = initialize_app(credentials.Certificate(config_dict))
            logger.info("Firebase Admin SDK initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize Firebase Admin SDK: {e}")
            self.app = None

    def is_configured(self) -> bool:
        return self.app is not None

    @staticmethod
    def _apns_config() -> messaging.APNSConfig:
        return messaging.APNSConfig(
            headers={"apns-priority": "10"},
            payload=messaging.APNSPayload(
                aps=messaging.Aps(sound="default", content_available=True),
            ),
        )

    def send_notification_to_multiple_tokens(
        self,
        tokens: List[str],
        title: str,
        body: str,
        data: Optional[Dict[str, str]] = None,
    ) -> Dict[str, object]:
        """
        Sends one push to every token.

        Returns:
            Counts of delivered/failed messages plus the tokens FCM rejected
            as unknown, so callers can deactivate them.
        """
        if not self.is_configured():
            logger.error("FCM not configured")
            return {"success": 0, "failure": len(tokens), "invalid_tokens": []}

        if not tokens:
            return {"success": 0, "failure": 0, "invalid_tokens": []}

        try:
            message = messaging.MulticastMessage(
                notification=messaging.Notification(title=title, body=body),
                data=data or {},
                tokens=tokens,
                apns=self._apns_config(),
            )
            response = messaging.send_each_for_multicast(message)

            logger.info(
                f"Successfully sent {response.success_count} messages, "
                f"{response.failure_count} failed"
            )

            invalid_tokens = []
            for i, resp in enumerate(response.responses):
                if resp.success or not resp.exception:
                    continue
                error_code = getattr(resp.exception, "code", None)
                error_message = str(resp.exception).lower()
                logger.error(f"Failed to send to token {tokens[i][:20]}...: {error_message}")
                if (
                    error_code in INVALID_TOKEN_CODES
                    or "not found" in error_message
                    or "unregistered" in error_message
                ):
                    invalid_tokens.append(tokens[i])

            return {
                "success": response.success_count,
                "failure": response.failure_count,
                "invalid_tokens": invalid_tokens,
            }

        except FirebaseError as e:
            logger.error(f"Firebase error sending multicast notification: {e}")
            return {"success": 0, "failure": len(tokens), "invalid_tokens": []}


fcm_service = FCMService()
