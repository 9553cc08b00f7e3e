"""Shared values and doubles for webhook tests."""

import json

ALICE_SECRET = "whsec-alice"
BOB_SECRET = "whsec-bob"


def build_payload(event_type="charge:confirmed", charge_id="ch_1"):
    """Raw body of a Commerce webhook delivery."""
    event = {"id": "evt-1", "type": event_type}
    if charge_id is not None:
        event["data"] = {"id": charge_id, "code": "ABCD1234"}
    return json.dumps({"id": 1, "scheduled_for": "2024-01-01T00:00:00Z", "event": event}).encode()


class InMemoryRecipientStore:
    """RecipientStore double that records lookups."""

    def __init__(self, *recipients):
        self._recipients = {recipient.username: recipient for recipient in recipients}
        self.lookups = []

    def lookup(self, username):
        self.lookups.append(username)
        return self._recipients.get(username)
