import plistlib

import login_item


def test_enable_writes_launch_agent(tmp_path):
    path = str(tmp_path / "LaunchAgents" / "com.clipstack.agent.plist")
    assert login_item.set_enabled(True, ["/usr/bin/python3", "/opt/main.py"], path=path)
    assert login_item.is_enabled(path)

    with open(path, "rb") as f:
        payload = plistlib.load(f)
    assert payload["Label"] == "com.clipstack.agent"
    assert payload["ProgramArguments"] == ["/usr/bin/python3", "/opt/main.py"]
    assert payload["RunAtLoad"] is True


def test_disable_removes_launch_agent(tmp_path):
    path = str(tmp_path / "agent.plist")
    login_item.set_enabled(True, ["clipstack"], path=path)
    assert login_item.set_enabled(False, ["clipstack"], path=path)
    assert not login_item.is_enabled(path)
    assert login_item.set_enabled(False, ["clipstack"], path=path)


def test_enable_failure_returns_false(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("x")
    assert not login_item.set_enabled(True, ["clipstack"], path=str(blocker / "agent.plist"))
