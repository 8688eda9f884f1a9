"""
Faults module behavioral tests (payloads, merging, rendering).

Scope
- Validate CommandException state: message, options, attribute access.
- Validate trigger() and __replace__ merging.
- Validate rich rendering of the header, message and hint.

Conventions
- Test method names follow CamelCase per project convention.
"""
import io
import unittest
from unittest import TestCase

from rich.console import Console

from simplecli.faults import (
    CommandException,
    CommandNotice,
    FaultCode,
    HelpRequested,
    NoCommandError,
    UnknownCommandError,
    trigger,
)


def _rendered(fault):
    buffer = io.StringIO()
    Console(file=buffer, width=120).print(fault)
    return buffer.getvalue()


class TestState(TestCase):
    """Behavioral tests for the fault payload."""

    def testMessageAndOptions(self):
        fault = UnknownCommandError("unknown command 'x'", input="x", index=1)
        self.assertEqual(str(fault), "unknown command 'x'")
        self.assertEqual(fault.message, "unknown command 'x'")
        self.assertEqual(fault.input, "x")
        self.assertEqual(fault.options["index"], 1)

    def testMissingAttribute(self):
        with self.assertRaises(AttributeError):
            UnknownCommandError("boom").suggestions

    def testOptionsAreReadOnly(self):
        with self.assertRaises(TypeError):
            UnknownCommandError("boom").options["input"] = "x"

    def testToolAndCodeDefaultToNone(self):
        fault = CommandException()
        self.assertIsNone(fault.tool)
        self.assertIsNone(fault.code)
        self.assertEqual(str(fault), "")

    def testNoticesAreBenign(self):
        for cls in (NoCommandError, HelpRequested):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, CommandNotice))
        self.assertFalse(issubclass(UnknownCommandError, CommandNotice))


class TestTrigger(TestCase):
    """Behavioral tests for trigger() and option merging."""

    def testReplaceMergesOptions(self):
        fault = UnknownCommandError("boom", input="x", index=1)
        merged = fault.__replace__(index=2, tool="root")
        self.assertIsInstance(merged, UnknownCommandError)
        self.assertEqual(merged.index, 2)
        self.assertEqual(merged.input, "x")
        self.assertEqual(merged.tool, "root")
        self.assertEqual(fault.index, 1)

    def testTriggerRaisesMergedCopy(self):
        with self.assertRaises(UnknownCommandError) as context:
            trigger(UnknownCommandError("boom", input="x"), index=3)
        self.assertEqual(context.exception.index, 3)
        self.assertEqual(context.exception.message, "boom")

    def testTriggerRejectsPlainExceptions(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("boom"))


class TestCodes(TestCase):
    """Behavioral tests for fault codes."""

    def testNormalizeDefaultsToNumber(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "21111")

    def testCodesAreUnique(self):
        self.assertEqual(len({code.value for code in FaultCode}), len(FaultCode))


class TestRender(TestCase):
    """Behavioral tests for the rich rendering of faults."""

    def setUp(self):
        self.fault = UnknownCommandError(
            "unknown command 'frobnicate' at first position",
            title="unknown command",
            code=FaultCode.UNKNOWN_COMMAND,
            hint="run 'app --help' to see available commands",
        )

    def testPlainRendering(self):
        output = _rendered(self.fault)
        self.assertIn("21111", output)
        self.assertIn("Unknown Command", output)
        self.assertIn("unknown command 'frobnicate' at first position", output)
        self.assertIn("→ run 'app --help' to see available commands", output)

    def testFancyRendering(self):
        output = _rendered(self.fault.__replace__(fancy=True))
        self.assertIn("Unknown Command", output)
        self.assertIn("at first position", output)

    def testDefaultTitle(self):
        self.assertIn("Command Error", _rendered(CommandException("boom")))


if __name__ == "__main__":
    unittest.main()
