"""
DynamoDB Session Adapter - AWS-native session storage.
"""

from typing import Optional, List, Dict, Any
from datetime import datetime
import json
from storefront_auth.ports.session_port import SessionPort
from storefront_auth.domain.principal import SessionPrincipal
from storefront_auth.domain.session import SessionRecord, SessionStatus


class DynamoDBSessionAdapter(SessionPort):
    """
    DynamoDB-backed session storage.

    Sessions stored in DynamoDB with TTL-based expiration.
    Requires: pip install boto3
    """

    def __init__(
        self,
        table_name: str = "storefront-sessions",
        region_name: str = "us-east-1",
        table=None,
    ):
        """
        Initialize DynamoDB session adapter.

        Args:
            table_name: DynamoDB table name
            region_name: AWS region
            table: Pre-built boto3 Table resource (skips client creation)

        Table schema:
            - Partition key: session_id (S)
            - GSI: user_id-index (user_id as partition key, N)
            - TTL attribute: expires_at_timestamp
        """
        self._table_name = table_name

        if table is not None:
            self._table = table
            return

        try:
            import boto3
        except ImportError:
            raise ImportError("boto3 package required: pip install boto3")

        dynamodb = boto3.resource("dynamodb", region_name=region_name)
        self._table = dynamodb.Table(table_name)

    def create(
        self,
        principal: SessionPrincipal,
        ttl: int = 3600,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> SessionRecord:
        """Create a new session in DynamoDB."""
        session = SessionRecord.create(
            principal=principal,
            ttl=ttl,
            ip_address=ip_address,
            user_agent=user_agent,
            metadata=metadata,
        )

        self._table.put_item(Item=self._session_to_item(session))

        return session

    def get(self, session_id: str) -> Optional[SessionRecord]:
        """Get a session from DynamoDB."""
        if not session_id:
            return None

        response = self._table.get_item(Key={"session_id": session_id})

        if "Item" not in response:
            return None

        session = self._item_to_session(response["Item"])

        # DynamoDB TTL deletion lags; expired items may still be readable
        if not session.is_valid():
            self.delete(session_id)
            return None

        return session

    def refresh(self, session_id: str, ttl: int, max_duration: Optional[int] = None) -> bool:
        """Slide session expiry forward."""
        session = self.get(session_id)
        if not session:
            return False

        if not session.refresh(ttl, max_duration=max_duration):
            return False

        return self._replace(session)

    def update_principal(self, session_id: str, principal: SessionPrincipal) -> bool:
        """Replace the principal snapshot."""
        session = self.get(session_id)
        if not session:
            return False

        session.principal = principal
        session.update_activity()
        return self._replace(session)

    def delete(self, session_id: str) -> bool:
        """Delete a session from DynamoDB."""
        response = self._table.delete_item(
            Key={"session_id": session_id},
            ReturnValues="ALL_OLD",
        )
        return "Attributes" in response

    def list_by_user(self, user_id: int) -> List[SessionRecord]:
        """List all active sessions for a principal."""
        response = self._table.query(
            IndexName="user_id-index",
            KeyConditionExpression="user_id = :user_id",
            ExpressionAttributeValues={":user_id": user_id},
        )

        sessions = []
        for item in response.get("Items", []):
            session = self._item_to_session(item)
            if session.is_valid():
                sessions.append(session)
            else:
                # Clean up expired
                self.delete(session.session_id)

        return sessions

    def cleanup_expired(self) -> int:
        """
        Clean up expired sessions.

        DynamoDB TTL handles automatic deletion, so this is mostly a no-op.
        Returns 0 since cleanup is handled by DynamoDB.
        """
        return 0

    def _replace(self, session: SessionRecord) -> bool:
        """Overwrite a session only if the item still exists."""
        from botocore.exceptions import ClientError

        try:
            self._table.put_item(
                Item=self._session_to_item(session),
                ConditionExpression="attribute_exists(session_id)",
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                # Deleted after it was read
                return False
            raise
        return True

    def _session_to_item(self, session: SessionRecord) -> Dict[str, Any]:
        """Convert SessionRecord to DynamoDB item."""
        return {
            "session_id": session.session_id,
            "user_id": session.user_id,
            "principal": json.dumps(session.principal.to_dict()),
            "created_at": session.created_at.isoformat(),
            "expires_at": session.expires_at.isoformat(),
            "expires_at_timestamp": int(session.expires_at.timestamp()),  # For TTL
            "status": session.status.value,
            "ip_address": session.ip_address,
            "user_agent": session.user_agent,
            "last_activity": session.last_activity.isoformat() if session.last_activity else None,
            "metadata": json.dumps(session.metadata),
        }

    def _item_to_session(self, item: Dict[str, Any]) -> SessionRecord:
        """Convert DynamoDB item to SessionRecord."""
        return SessionRecord(
            session_id=item["session_id"],
            principal=SessionPrincipal.from_dict(json.loads(item["principal"])),
            created_at=datetime.fromisoformat(item["created_at"]),
            expires_at=datetime.fromisoformat(item["expires_at"]),
            status=SessionStatus(item["status"]),
            ip_address=item.get("ip_address"),
            user_agent=item.get("user_agent"),
            last_activity=datetime.fromisoformat(item["last_activity"]) if item.get("last_activity") else None,
            metadata=json.loads(item.get("metadata", "{}")),
        )
