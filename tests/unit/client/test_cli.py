import httpx
import pytest

from signet import cli
from signet.client import AuthSession, MemoryTokenStore, RequestCoordinator
from signet.client.token_store import AUTH_TOKEN_KEY


def make_session(handler, store=None) -> AuthSession:
    return AuthSession(
        RequestCoordinator(
            "http://api.test/authentication",
            store if store is not None else MemoryTokenStore(),
            transport=httpx.MockTransport(handler),
        )
    )


def parse(*argv):
    return cli.create_parser().parse_args(list(argv))


def test_parser_requires_a_command():
    with pytest.raises(SystemExit):
        parse()


def test_parser_global_options():
    args = parse("--api-url", "http://api.test/authentication", "login", "--email", "a@x.com")

    assert args.api_url == "http://api.test/authentication"
    assert args.command == "login"
    assert args.password is None


@pytest.mark.asyncio
async def test_profile_prints_claims(capsys):
    profile = {
        "message": "Access granted to protected route.",
        "authenticatedUser": {"sub": "1", "email": "a@x.com", "name": None, "iat": 1},
    }
    session = make_session(
        lambda request: httpx.Response(200, json=profile),
        MemoryTokenStore({AUTH_TOKEN_KEY: "access"}),
    )

    exit_code = await cli.run_client_command(parse("profile"), session)

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "Access granted to protected route." in out
    assert "Email: a@x.com" in out
    assert "Name: N/A" in out


@pytest.mark.asyncio
async def test_profile_requires_login(capsys):
    session = make_session(lambda request: httpx.Response(500))

    assert await cli.run_client_command(parse("profile"), session) == 1
    assert "Not logged in." in capsys.readouterr().err


@pytest.mark.asyncio
async def test_login_prints_notice(capsys):
    session = make_session(
        lambda request: httpx.Response(200, json={"accessToken": "access", "user": {"id": 1}})
    )

    exit_code = await cli.run_client_command(
        parse("login", "--email", "a@x.com", "--password", "password1"), session
    )

    assert exit_code == 0
    assert "Login successful! Welcome." in capsys.readouterr().out


@pytest.mark.asyncio
async def test_handled_error_exits_with_1(capsys):
    session = make_session(
        lambda request: httpx.Response(409, json={"detail": "User with this email already exists"})
    )

    exit_code = await cli.run_client_command(
        parse("register", "--email", "a@x.com", "--password", "password1"), session
    )

    assert exit_code == 1
    assert "User with this email already exists" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_password_is_prompted_for(mocker):
    getpass = mocker.patch("signet.cli.getpass.getpass", return_value="password1")
    session = make_session(
        lambda request: httpx.Response(200, json={"accessToken": "access", "user": {"id": 1}})
    )

    await cli.run_client_command(parse("login", "--email", "a@x.com"), session)

    getpass.assert_called_once()


def test_main_profile_without_credentials(tmp_path, capsys):
    token_file = str(tmp_path / "tokens.json")
    exit_code = cli.main(
        ["--api-url", "http://api.test/authentication", "--token-file", token_file, "profile"]
    )

    assert exit_code == 1
    assert "Not logged in." in capsys.readouterr().err


def test_serve_runs_uvicorn(mocker):
    run = mocker.patch("uvicorn.run")

    assert cli.main(["serve", "--port", "4100"]) == 0

    run.assert_called_once()
    assert run.call_args.args == ("signet.main:app",)
    assert run.call_args.kwargs["port"] == 4100
