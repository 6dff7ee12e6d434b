import pytest

from cvsops.adapters.errors import LaunchError

ROOT = ":pserver:anon@cvs.example.org:/cvsroot"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,args,tail",
    [
        ("remove", ("old.c",), ["remove", "old.c"]),
        ("add", ("src",), ["add", "src"]),
        ("add_binary", ("logo.png",), ["add", "-kb", "logo.png"]),
        ("commit", ("a.txt", "fix bug"), ["commit", "-m", "fix bug", "a.txt"]),
        ("update", ("b.txt",), ["update", "b.txt"]),
    ],
)
async def test_operations_build_expected_argv(client, launcher, method, args, tail):
    await getattr(client, method)(*args)
    assert launcher.calls[0][1] == ["-d", ROOT, *tail]


@pytest.mark.asyncio
async def test_commit_success_persists_comment_before_resolving(client, launcher, comment_store):
    future = client.commit("a.txt", "fix bug")
    assert await future == 0
    assert comment_store.comments == ["fix bug"]
    assert launcher.events == ["exit:0", "comment:fix bug"]


@pytest.mark.asyncio
async def test_update_conflict_logs_and_keeps_comment(client, launcher, log_sink, comment_store):
    launcher.exit_code = 1
    launcher.chunks = [b"C b.txt\n"]
    assert await client.update("b.txt") == 1
    assert log_sink.texts == ["C b.txt\n"]
    assert comment_store.comments == []


@pytest.mark.asyncio
async def test_failed_commit_does_not_persist_comment(client, launcher, comment_store):
    launcher.exit_code = 1
    launcher.chunks = [b"cvs commit: Up-to-date check failed for `a.txt'\n"]
    assert await client.commit("a.txt", "fix bug") == 1
    assert comment_store.comments == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,args",
    [
        ("remove", ("old.c",)),
        ("add", ("src",)),
        ("add_binary", ("logo.png",)),
        ("commit", ("a.txt", "fix bug")),
        ("update", ("b.txt",)),
    ],
)
async def test_missing_executable_rejects_every_operation(
    client, launcher, log_sink, comment_store, missing_executable, method, args
):
    launcher.spawn_error = missing_executable
    with pytest.raises(LaunchError):
        await getattr(client, method)(*args)
    assert log_sink.texts == []
    assert comment_store.comments == []
