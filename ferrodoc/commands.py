"""The table of supported commands and the listCommands reply."""

from __future__ import annotations

from dataclasses import dataclass

from .values import Document


@dataclass(frozen=True)
class Command:
    """A supported command: its canonical name, help text and whether it uses storage."""

    name: str
    help: str
    uses_storage: bool = False


COMMANDS: dict[str, Command] = {
    "buildinfo": Command("buildInfo", "Returns a summary of the build information."),
    "collstats": Command("collStats", "Storage data for a collection."),
    "createindexes": Command("createIndexes", "Creates indexes on a collection.", True),
    "create": Command("create", "Creates the collection."),
    "datasize": Command("dataSize", "Returns the size of the collection in bytes."),
    "dbstats": Command("dbStats", "Returns the statistics of the database."),
    "drop": Command("drop", "Drops the collection."),
    "dropdatabase": Command("dropDatabase", "Deletes the database."),
    "getcmdlineopts": Command(
        "getCmdLineOpts", "Returns a summary of all runtime and configuration options."
    ),
    "getlog": Command("getLog", "Returns the most recent logged events from memory."),
    "getparameter": Command("getParameter", "Returns the value of the parameter."),
    "hostinfo": Command("hostInfo", "Returns a summary of the system information."),
    "ismaster": Command("isMaster", "Returns the role of the server instance."),
    "hello": Command("hello", "Returns the role of the server instance."),
    "listcollections": Command(
        "listCollections",
        "Returns the information of the collections and views in the database.",
    ),
    "listdatabases": Command("listDatabases", "Returns a summary of all the databases."),
    "listcommands": Command(
        "listCommands", "Returns information about the currently supported commands."
    ),
    "ping": Command("ping", "Returns a pong response. Used for testing purposes."),
    "whatsmyuri": Command("whatsmyuri", "An internal command."),
    "serverstatus": Command("serverStatus", "Returns an overview of the databases state."),
    "delete": Command("delete", "Deletes documents matched by the query.", True),
    "find": Command("find", "Returns documents matched by the custom query.", True),
    "count": Command(
        "count", "Returns the count of documents that's matched by the query.", True
    ),
    "insert": Command("insert", "Inserts documents into the database.", True),
    "update": Command("update", "Updates documents that are matched by the query.", True),
    "debug_error": Command("debug_error", "Used for debugging purposes."),
    "debug_panic": Command("debug_panic", "Used for debugging purposes."),
}


def list_commands() -> Document:
    """Return the listCommands reply document."""
    commands = Document(
        {command.name: Document({"help": command.help}) for command in COMMANDS.values()}
    )
    return Document({"commands": commands, "ok": 1.0})