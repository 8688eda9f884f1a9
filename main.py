from typing import Annotated

from simplecli import handle


class Database:
    """manage the application database."""
    path: Annotated[str, "database file"] = "app.db"

    def create(self):
        """create the database."""
        print("Creating database at %s." % self.path)

    def drop(self):
        """drop the database."""
        print("Dropping database at %s." % self.path)


class App:
    port: Annotated[int, "port to listen on"] = 8080

    def __init__(self):
        self.database = Database()

    def start(self):
        """start the app."""
        print("Listening app at %d." % self.port)

    def reload(self):
        """reload the app."""
        print("Reloading app.")

    def kill(self):
        """stop the app."""
        print("Stopping app.")


if __name__ == '__main__':
    handle(App())
