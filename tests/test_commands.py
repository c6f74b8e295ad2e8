from ferrodoc.commands import COMMANDS, Command, list_commands


def test_command_keys_are_lowercase():
    listed = list_commands()["commands"]
    for name in listed:
        assert name.lower() in COMMANDS
    for key in COMMANDS:
        assert key == key.lower()


def test_command_name_matches_key():
    for key, command in COMMANDS.items():
        assert key == command.name.lower()


def test_list_commands_covers_every_command():
    reply = list_commands()
    assert reply["ok"] == 1.0
    assert list(reply) == ["commands", "ok"]
    listed = reply["commands"]
    assert len(listed) == len(COMMANDS)
    for command in COMMANDS.values():
        assert listed[command.name] == {"help": command.help}


def test_list_commands_help_text():
    listed = list_commands()["commands"]
    assert listed["ping"]["help"] == "Returns a pong response. Used for testing purposes."
    assert listed["dropDatabase"]["help"] == "Deletes the database."


def test_storage_commands():
    storage = {key for key, command in COMMANDS.items() if command.uses_storage}
    assert storage == {"createindexes", "delete", "find", "count", "insert", "update"}


def test_command_fields():
    command = Command("ping", "x")
    assert command.name == "ping"
    assert command.help == "x"
    assert COMMANDS["hello"].name == "hello"
    assert COMMANDS["ismaster"].name == "isMaster"
    assert COMMANDS["hello"].help == COMMANDS["ismaster"].help