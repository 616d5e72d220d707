from order_api.domain.fields import PRIVILEGED_FIELDS, filter_privileged_fields, sanitize_payload


class TestSanitizePayload:
    def test_trims_top_level_strings(self):
        payload = {"orderNumber": "  ORD-9 ", "customerName": "\tAnn\n", "notes": ""}

        assert sanitize_payload(payload) == {"orderNumber": "ORD-9", "customerName": "Ann", "notes": ""}

    def test_non_strings_pass_through(self):
        items = [{"productName": "  Widget  ", "quantity": 1, "price": 2}]
        payload = {"items": items, "assignedTo": 3, "tags": [" a "], "estimatedDeliveryDate": None}

        result = sanitize_payload(payload)

        assert result["items"] is items
        assert result["items"][0]["productName"] == "  Widget  "
        assert result["tags"] == [" a "]
        assert result["assignedTo"] == 3
        assert result["estimatedDeliveryDate"] is None

    def test_empty_payload(self):
        assert sanitize_payload({}) == {}


class TestFilterPrivilegedFields:
    def test_classifier_contents(self):
        assert PRIVILEGED_FIELDS == {
            "assignedTo", "adminNotes", "priority", "tags", "estimatedDeliveryDate", "dueDate",
        }

    def test_admin_payload_unchanged(self):
        payload = {"priority": "urgent", "tags": ["vip"], "notes": "x"}

        assert filter_privileged_fields(payload, "admin") is payload

    def test_user_payload_loses_every_privileged_key(self):
        payload = {key: "value" for key in PRIVILEGED_FIELDS}
        payload["notes"] = "keep me"

        assert filter_privileged_fields(payload, "user") == {"notes": "keep me"}

    def test_absent_keys_are_noops(self):
        payload = {"customerName": "A"}

        assert filter_privileged_fields(payload, "user") == {"customerName": "A"}

    def test_does_not_mutate_input(self):
        payload = {"priority": "high", "notes": "n"}

        filter_privileged_fields(payload, "user")

        assert payload == {"priority": "high", "notes": "n"}

    def test_unknown_role_is_treated_as_non_admin(self):
        assert filter_privileged_fields({"adminNotes": "x"}, "guest") == {}
