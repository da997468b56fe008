"""
Unit tests for Redis and DynamoDB session adapters against mocked clients.
"""

import json
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from storefront_auth.adapters import DynamoDBSessionAdapter, RedisSessionAdapter
from storefront_auth.domain.principal import SessionPrincipal


PRINCIPAL = SessionPrincipal(id=42, email="a@x.com", first_name="A")


class TestRedisSessionAdapterMocked:

    def setup_method(self):
        self.store = {}
        self.client = MagicMock()
        self.client.set.side_effect = self._set
        self.client.get.side_effect = lambda key: self.store.get(key)
        self.client.delete.side_effect = lambda key: 1 if self.store.pop(key, None) else 0
        self.client.ttl.return_value = -1
        self.adapter = RedisSessionAdapter(redis_client=self.client, prefix="t:")

    def _set(self, key, value, ex=None, xx=False):
        if xx and key not in self.store:
            return None
        self.store[key] = value
        return True

    def test_create_writes_json_with_ttl(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)

        key, value = self.client.set.call_args.args
        assert key == f"t:{session.session_id}"
        assert 595 <= self.client.set.call_args.kwargs["ex"] <= 600
        assert self.client.set.call_args.kwargs["xx"] is False
        assert json.loads(value)["principal"]["email"] == "a@x.com"
        self.client.sadd.assert_called_once_with("t:user:42", session.session_id)

    def test_get_roundtrip(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        assert self.adapter.get(session.session_id).principal == PRINCIPAL

    def test_get_unreadable_record(self):
        self.store["t:bad"] = "{not json"
        assert self.adapter.get("bad") is None

    def test_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)

        assert self.adapter.delete(session.session_id) is True
        self.client.srem.assert_called_with("t:user:42", session.session_id)
        assert self.adapter.delete(session.session_id) is False

    def test_refresh_rewrites_ttl(self):
        session = self.adapter.create(PRINCIPAL, ttl=60)

        assert self.adapter.refresh(session.session_id, 3600) is True
        assert self.client.set.call_args.kwargs["ex"] > 3000
        assert self.client.set.call_args.kwargs["xx"] is True

    def test_refresh_after_concurrent_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=60)
        read = self.adapter.get(session.session_id)

        # Logout lands between the read and the rewrite
        self.store.pop(f"t:{session.session_id}")
        self.adapter.get = lambda session_id: read

        assert self.adapter.refresh(session.session_id, 3600) is False
        assert f"t:{session.session_id}" not in self.store

    def test_update_principal_after_concurrent_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        read = self.adapter.get(session.session_id)

        self.store.pop(f"t:{session.session_id}")
        self.adapter.get = lambda session_id: read

        promoted = SessionPrincipal(id=42, email="a@x.com", is_admin=True)
        assert self.adapter.update_principal(session.session_id, promoted) is False
        assert f"t:{session.session_id}" not in self.store

    def test_client_errors_propagate(self):
        self.client.get.side_effect = ConnectionError("redis down")
        with pytest.raises(ConnectionError):
            self.adapter.get("anything")


class TestDynamoDBSessionAdapterMocked:

    def setup_method(self):
        self.items = {}
        self.table = MagicMock()
        self.table.put_item.side_effect = self._put_item
        self.table.get_item.side_effect = lambda Key: (
            {"Item": self.items[Key["session_id"]]} if Key["session_id"] in self.items else {}
        )

        def delete_item(Key, ReturnValues=None):
            old = self.items.pop(Key["session_id"], None)
            return {"Attributes": old} if old else {}

        self.table.delete_item.side_effect = delete_item
        self.adapter = DynamoDBSessionAdapter(table=self.table)

    def _put_item(self, Item, ConditionExpression=None):
        if ConditionExpression and Item["session_id"] not in self.items:
            raise ClientError(
                {"Error": {"Code": "ConditionalCheckFailedException", "Message": "The conditional request failed"}},
                "PutItem",
            )
        self.items[Item["session_id"]] = Item
        return {}

    def test_create_sets_ttl_attribute(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)

        item = self.items[session.session_id]
        assert item["user_id"] == 42
        assert item["expires_at_timestamp"] == int(session.expires_at.timestamp())

    def test_get_roundtrip(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        assert self.adapter.get(session.session_id).principal == PRINCIPAL
        assert self.adapter.get("missing") is None

    def test_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)

        assert self.adapter.delete(session.session_id) is True
        assert self.adapter.delete(session.session_id) is False

    def test_list_by_user_queries_index(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        self.table.query.return_value = {"Items": [self.items[session.session_id]]}

        sessions = self.adapter.list_by_user(42)
        assert [s.session_id for s in sessions] == [session.session_id]
        assert self.table.query.call_args.kwargs["IndexName"] == "user_id-index"

    def test_update_principal(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        promoted = SessionPrincipal(id=42, email="a@x.com", is_admin=True)

        assert self.adapter.update_principal(session.session_id, promoted) is True
        assert self.adapter.get(session.session_id).principal.is_admin is True

    def test_refresh_uses_conditional_write(self):
        session = self.adapter.create(PRINCIPAL, ttl=60)

        assert self.adapter.refresh(session.session_id, 3600) is True
        kwargs = self.table.put_item.call_args.kwargs
        assert kwargs["ConditionExpression"] == "attribute_exists(session_id)"
        assert kwargs["Item"]["expires_at_timestamp"] > int(session.expires_at.timestamp())

    def test_refresh_after_concurrent_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=60)
        read = self.adapter.get(session.session_id)

        # Logout lands between the read and the rewrite
        self.items.pop(session.session_id)
        self.adapter.get = lambda session_id: read

        assert self.adapter.refresh(session.session_id, 3600) is False
        assert session.session_id not in self.items

    def test_update_principal_after_concurrent_delete(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        read = self.adapter.get(session.session_id)

        self.items.pop(session.session_id)
        self.adapter.get = lambda session_id: read

        promoted = SessionPrincipal(id=42, email="a@x.com", is_admin=True)
        assert self.adapter.update_principal(session.session_id, promoted) is False
        assert session.session_id not in self.items

    def test_other_client_errors_propagate(self):
        session = self.adapter.create(PRINCIPAL, ttl=600)
        self.table.put_item.side_effect = ClientError(
            {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow down"}},
            "PutItem",
        )

        with pytest.raises(ClientError):
            self.adapter.refresh(session.session_id, 3600)
