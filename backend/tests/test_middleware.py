"""
Smart Tourism Backend — Middleware Unit Tests
===============================================

What we test:
    ✅ Well-formed client request IDs are reused
    ✅ Empty, oversized or unsafe IDs are replaced with a generated one
"""

import pytest

from smart_tourism.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    @pytest.mark.parametrize("value", ["abc12345", "req_2024-01-15", "A" * 64])
    def test_client_id_reused(self, value):
        assert resolve_request_id(value) == value

    @pytest.mark.parametrize("value", ["", "A" * 65, "has space", "line\nbreak", "semi;colon"])
    def test_unsafe_id_replaced(self, value):
        rid = resolve_request_id(value)

        assert rid != value
        assert len(rid) == 8
        int(rid, 16)

    def test_generated_ids_differ(self):
        assert resolve_request_id("") != resolve_request_id("")
