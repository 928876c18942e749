from __future__ import annotations

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from domain import (
    INTERNAL_ERROR_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    ChatStage,
    ChatValidationError,
    parse_signature_timestamp,
)
from services import EchoBotService
from services.chat_service import GREETING_REPLY


FIXED_MOMENT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def broken_clock() -> datetime:
    raise RuntimeError("clock down")


class FaultyEchoBotService(EchoBotService):
    @staticmethod
    def generate_reply(message: str) -> str:
        raise KeyError("rules table missing")


class GenerateReplyTest(unittest.TestCase):
    def test_hello_gets_greeting(self) -> None:
        self.assertEqual(EchoBotService.generate_reply("Hello there"), GREETING_REPLY)

    def test_greeting_match_is_case_insensitive(self) -> None:
        self.assertEqual(EchoBotService.generate_reply("HI!"), GREETING_REPLY)
        self.assertEqual(EchoBotService.generate_reply("well HeLLo"), GREETING_REPLY)

    def test_hi_matches_inside_other_words(self) -> None:
        self.assertEqual(EchoBotService.generate_reply("this"), GREETING_REPLY)
        self.assertEqual(EchoBotService.generate_reply("chip"), GREETING_REPLY)

    def test_other_messages_are_shouted_back(self) -> None:
        self.assertEqual(EchoBotService.generate_reply("test"), "BOT SAYS: TEST")
        self.assertEqual(EchoBotService.generate_reply("cool beans"), "BOT SAYS: COOL BEANS")

    def test_echo_keeps_original_whitespace(self) -> None:
        self.assertEqual(EchoBotService.generate_reply("  good day "), "BOT SAYS:   GOOD DAY ")


class ValidateTest(unittest.TestCase):
    def test_accepts_non_blank_string(self) -> None:
        request = EchoBotService.validate({"message": " yo "})
        self.assertEqual(request.message, " yo ")

    def test_rejects_bad_payloads(self) -> None:
        for payload in (
            {},
            {"message": ""},
            {"message": "   \t\n"},
            {"message": None},
            {"message": 42},
            {"message": ["hi"]},
            ["message"],
            "hello",
            None,
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(ChatValidationError):
                    EchoBotService.validate(payload)


class RespondTest(unittest.TestCase):
    def setUp(self) -> None:
        self.service = EchoBotService("EchoBot 9000", clock=lambda: FIXED_MOMENT)

    def test_success_body_and_signature(self) -> None:
        outcome = self.service.respond({"message": "test"})

        self.assertEqual(outcome.status_code, 200)
        self.assertEqual(outcome.stage, ChatStage.RESPONDED)
        self.assertEqual(
            outcome.body,
            {
                "response": "BOT SAYS: TEST",
                "backendSignature": "Processed by EchoBot 9000 @ 2024-05-01T12:00:00.000Z",
            },
        )

    def test_validation_failure_body(self) -> None:
        outcome = self.service.respond({"message": ""})

        self.assertEqual(outcome.status_code, 400)
        self.assertEqual(outcome.stage, ChatStage.REJECTED)
        self.assertEqual(
            outcome.body,
            {
                "error": VALIDATION_ERROR_MESSAGE,
                "backendSignature": "Error processed by EchoBot 9000 @ 2024-05-01T12:00:00.000Z",
            },
        )

    def test_internal_fault_body(self) -> None:
        service = FaultyEchoBotService("EchoBot 9000", clock=lambda: FIXED_MOMENT)

        with self.assertLogs("echobot.chat", level="ERROR"):
            outcome = service.respond({"message": "test"})

        self.assertEqual(outcome.status_code, 500)
        self.assertEqual(outcome.stage, ChatStage.FAULTED)
        self.assertEqual(outcome.body["error"], INTERNAL_ERROR_MESSAGE)
        self.assertIn("rules table missing", outcome.body["details"])
        self.assertTrue(outcome.body["backendSignature"].startswith("Error processed by EchoBot 9000 @ "))

    def test_failing_clock_still_yields_signed_500(self) -> None:
        service = EchoBotService("EchoBot 9000", clock=broken_clock)

        with self.assertLogs("echobot.chat", level="ERROR"):
            outcome = service.respond({"message": "test"})

        self.assertEqual(outcome.status_code, 500)
        self.assertEqual(outcome.stage, ChatStage.FAULTED)
        self.assertEqual(outcome.body["error"], INTERNAL_ERROR_MESSAGE)
        self.assertEqual(outcome.body["details"], "clock down")
        signature = outcome.body["backendSignature"]
        self.assertTrue(signature.startswith("Error processed by EchoBot 9000 @ "))
        parse_signature_timestamp(signature)

    def test_failing_clock_on_rejected_request(self) -> None:
        service = EchoBotService("EchoBot 9000", clock=broken_clock)

        with self.assertLogs("echobot.chat", level="ERROR"):
            outcome = service.respond({})

        self.assertEqual(outcome.status_code, 400)
        self.assertEqual(outcome.body["error"], VALIDATION_ERROR_MESSAGE)
        self.assertTrue(outcome.body["backendSignature"].startswith("Error processed by EchoBot 9000 @ "))

    def test_repeated_requests_only_change_signature_time(self) -> None:
        service = EchoBotService("EchoBot 9000")
        first = service.respond({"message": "Hello there"})
        second = service.respond({"message": "Hello there"})

        self.assertEqual(first.body["response"], second.body["response"])
        self.assertLessEqual(
            parse_signature_timestamp(first.body["backendSignature"]),
            parse_signature_timestamp(second.body["backendSignature"]),
        )

    def test_every_outcome_has_parseable_signature(self) -> None:
        service = EchoBotService("EchoBot 9000")
        for payload in ({"message": "hi"}, {"message": "test"}, {}):
            with self.subTest(payload=payload):
                signature = service.respond(payload).body["backendSignature"]
                stamp = parse_signature_timestamp(signature)
                self.assertEqual(stamp.utcoffset(), timezone.utc.utcoffset(None))


if __name__ == "__main__":
    unittest.main()
