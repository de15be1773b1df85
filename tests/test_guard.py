"""Tests for the editing session and the exit guard"""

from pathlib import Path
from unittest.mock import patch

import vcguard.guard
from vcguard import EditorSession, ExitGuard, OpenFile, find_guard, is_active, toggle
from vcguard.config import GuardConfig


class TestEditorSession:
    """EditorSession tests"""

    def test_open(self, tmp_path: Path, session: EditorSession) -> None:
        context = session.open(tmp_path / "a.py", local_checks=("changes",))

        assert context.name == "a.py"
        assert context.local_checks == ["changes"]
        assert session.open_files == [context]

    def test_close(self, tmp_path: Path, session: EditorSession) -> None:
        context = session.open(tmp_path / "a.py")
        session.close(context)

        assert session.open_files == []

    def test_context_without_file(self) -> None:
        context = OpenFile()

        assert context.path is None
        assert context.name == "*scratch*"

    def test_relative_paths_become_absolute(self) -> None:
        assert OpenFile(path=Path("relative.txt")).path.is_absolute()

    def test_request_exit_runs_gates_in_order(self, session: EditorSession) -> None:
        calls = []
        session.exit_gates.append(lambda: calls.append("first") or True)
        session.exit_gates.append(lambda: calls.append("second") or False)
        session.exit_gates.append(lambda: calls.append("third") or True)

        assert session.request_exit() is False
        assert calls == ["first", "second"]

    def test_request_exit_without_gates(self, session: EditorSession) -> None:
        assert session.request_exit() is True


class TestToggle:
    """toggle tests"""

    def test_exported_from_package(self) -> None:
        assert toggle is vcguard.guard.toggle
        assert is_active is vcguard.guard.is_active
        assert ExitGuard is vcguard.guard.ExitGuard

    def test_register(self, session: EditorSession, guard_config: GuardConfig) -> None:
        assert toggle(session, guard_config) is True
        assert is_active(session)
        assert isinstance(session.exit_gates[0], ExitGuard)

    def test_register_once(self, session: EditorSession, guard_config: GuardConfig) -> None:
        toggle(session, guard_config)
        toggle(session, guard_config, 1)
        toggle(session, guard_config, 0)

        assert len(session.exit_gates) == 1

    def test_negative_unregisters(self, session: EditorSession, guard_config: GuardConfig) -> None:
        other_gate = lambda: True
        session.exit_gates.append(other_gate)
        toggle(session, guard_config)

        assert toggle(session, guard_config, -1) is False
        assert not is_active(session)
        assert session.exit_gates == [other_gate]

    def test_unregister_when_inactive(self, session: EditorSession, guard_config: GuardConfig) -> None:
        assert toggle(session, guard_config, -1) is False
        assert session.exit_gates == []


class TestExitGuard:
    """ExitGuard tests"""

    def test_clean_session_exits(self, make_repo, session: EditorSession, guard_config: GuardConfig, recording_confirm) -> None:
        root = make_repo("project")
        session.open(root / "a.py")
        confirm = recording_confirm()
        toggle(session, guard_config, confirm=confirm)

        with patch("vcguard.backends.command.CommandPredicate.__call__", return_value=False):
            assert session.request_exit() is True
        assert confirm.messages == []

    def test_unclean_session_asks(self, make_repo, session: EditorSession, guard_config: GuardConfig, recording_confirm) -> None:
        root = make_repo("project")
        session.open(root / "a.py")
        confirm = recording_confirm(False)
        toggle(session, guard_config, confirm=confirm)

        with patch("vcguard.backends.command.CommandPredicate.__call__", return_value=True):
            assert session.request_exit() is False
        assert confirm.messages == [
            f"Repository {root} has uncommitted changes and unpushed commits. Exit anyway?"
        ]

    def test_resolves_on_every_call(self, make_repo, session: EditorSession, guard_config: GuardConfig, recording_confirm) -> None:
        """Files opened after registration are checked"""
        confirm = recording_confirm(True)
        toggle(session, guard_config, confirm=confirm)
        guard = find_guard(session)

        with patch("vcguard.backends.command.CommandPredicate.__call__", return_value=True):
            assert guard() is True
            assert confirm.messages == []

            notes = make_repo("notes")
            session.open(notes / "todo.md")
            assert guard() is True

        assert confirm.messages == [f"Repository {notes} has untracked files. Exit anyway?"]

    def test_local_override(self, make_repo, session: EditorSession, guard_config: GuardConfig, recording_confirm) -> None:
        root = make_repo("project")
        session.open(root / "a.py", local_checks=[])
        confirm = recording_confirm()
        toggle(session, guard_config, confirm=confirm)

        with patch("vcguard.backends.command.CommandPredicate.__call__", return_value=True):
            assert session.request_exit() is True
        assert confirm.messages == []
