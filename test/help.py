"""
Help module behavioral tests (layout, placeholders, live values, printing).

Scope
- Validate the usage line and its '[options]' section.
- Validate the commands block: typed placeholders, child groups, descriptions.
- Validate the options block: kinds, flag form, descriptions, live values.
- Validate show(): target console and fancy panel.

Conventions
- Test method names follow CamelCase per project convention.
- Assertions read the plain text of the rendered help.
"""
import io
import unittest
from typing import Annotated
from unittest import TestCase

from rich.console import Console

from simplecli import Group, render, show


class Database:
    """manage the database."""
    path: Annotated[str, "database file"] = "app.db"

    def create(self):
        """create the database."""

    def drop(self):
        pass


class App:
    port: Annotated[int, "port to listen on"] = 8080
    verbose: bool = False

    def __init__(self):
        self.database = Database()

    def start(self):
        """start the app."""

    def add(self, x: int, y: int):
        pass

    def dry_run(self):
        pass


class Bare:
    def ping(self):
        pass


class TestRender(TestCase):
    """Behavioral tests for render()."""

    def setUp(self):
        self.app = App()
        self.root = Group(self.app, "app")
        self.text = render(self.root).plain

    def testUsageLine(self):
        self.assertEqual(self.text.splitlines()[0], "usage: app [options] <command>")

    def testUsageLineWithoutOptions(self):
        self.assertEqual(render(Group(Bare(), "bare")).plain.splitlines()[0], "usage: bare <command>")

    def testNestedRoute(self):
        self.assertEqual(
            render(self.root.children["database"]).plain.splitlines()[0],
            "usage: app database [options] <command>",
        )

    def testOperationPlaceholders(self):
        self.assertIn("  add <x:int> <y:int>", self.text)
        self.assertIn("  dry-run", self.text)

    def testOperationDescription(self):
        line = next(line for line in self.text.splitlines() if line.lstrip().startswith("start"))
        self.assertTrue(line.endswith("start the app."))

    def testChildGroupLine(self):
        line = next(line for line in self.text.splitlines() if "database ..." in line)
        self.assertTrue(line.endswith("manage the database."))

    def testOptionLines(self):
        self.assertIn("--port=<int>", self.text)
        self.assertIn("port to listen on (8080)", self.text)
        self.assertIn("--verbose[=<bool>]", self.text)
        self.assertIn("(False)", self.text)

    def testBlockOrder(self):
        self.assertLess(self.text.index("commands:"), self.text.index("options:"))
        self.assertLess(self.text.index("start"), self.text.index("database ..."))

    def testDescriptionsShareOneColumn(self):
        lines = [line for line in self.text.splitlines() if line.endswith(("start the app.", "manage the database."))]
        columns = {line.index(line.split("  ")[-1].strip()) for line in lines}
        self.assertEqual(len(columns), 1)

    def testRenderIsIdempotent(self):
        self.assertEqual(render(self.root).plain, self.text)

    def testReflectsLiveValues(self):
        self.app.port = 9090
        self.assertIn("port to listen on (9090)", render(self.root).plain)

    def testColorfulHasSamePlainText(self):
        self.assertEqual(render(self.root, colorful=True).plain, self.text)


class TestShow(TestCase):
    """Behavioral tests for show()."""

    def setUp(self):
        self.root = Group(App(), "app")
        self.buffer = io.StringIO()
        self.console = Console(file=self.buffer, width=100)

    def testPrintsHelp(self):
        show(self.root, console=self.console)
        self.assertIn("usage: app [options] <command>", self.buffer.getvalue())

    def testFancyPanel(self):
        show(self.root, console=self.console, fancy=True)
        self.assertIn("[ APP HELP ]", self.buffer.getvalue())
        self.assertIn("--port=<int>", self.buffer.getvalue())


if __name__ == "__main__":
    unittest.main()
