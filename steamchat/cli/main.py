"""steamchat CLI - Main commands."""
import asyncio
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="steamchat",
    help="Steam Friends chat over the Steam Web API",
    add_completion=False
)
console = Console()

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", envvar="STEAM_ACCESS_TOKEN", help="Access token from 'steamchat login'"
)


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def run_command(coro):
    """Run a command coroutine, exiting with code 1 on a Steam error."""
    from steamchat import SteamException

    try:
        return run_async(coro)
    except SteamException as e:
        console.print(f"[red]Failed: {e}[/red]")
        raise typer.Exit(1)


async def connect(client, token: Optional[str]) -> None:
    """Authenticate an open client with a token or exit."""
    from steamchat import LoginStatus

    if not token:
        console.print("[red]No access token. Run 'steamchat login' or pass --token.[/red]")
        raise typer.Exit(1)

    status = await client.authenticate_with_token(token)
    if status is not LoginStatus.LOGIN_SUCCESSFUL:
        console.print("[red]Login with access token failed. Run 'steamchat login' again.[/red]")
        raise typer.Exit(1)


def describe(update) -> str:
    """One-line rendering of an update."""
    from steamchat import UpdateType

    stamp = update.timestamp.strftime("%H:%M:%S")
    if update.type is UpdateType.MESSAGE:
        arrow = "->" if update.local else "<-"
        return f"[dim]{stamp}[/dim] {arrow} [cyan]{update.origin}[/cyan]: {update.text}"
    if update.type is UpdateType.EMOTE:
        return f"[dim]{stamp}[/dim] * [cyan]{update.origin}[/cyan] {update.text}"
    if update.type is UpdateType.TYPING_NOTIFICATION:
        return f"[dim]{stamp} {update.origin} is typing...[/dim]"
    return (
        f"[dim]{stamp}[/dim] [yellow]{update.origin}[/yellow] is now "
        f"{update.status.name.lower()} as '{update.nickname}'"
    )


@app.command()
def login(
    username: str = typer.Option(None, "--username", "-u", help="Steam account name"),
    password: str = typer.Option(None, "--password", "-p", help="Steam password"),
    code: str = typer.Option("", "--code", "-c", help="SteamGuard e-mail code"),
):
    """Login and print an access token for later commands."""
    from steamchat import SteamClient, LoginStatus

    if not username:
        username = typer.prompt("Username")
    if not password:
        password = typer.prompt("Password", hide_input=True)

    async def do_login():
        async with SteamClient() as steam:
            status = await steam.authenticate(username, password, code)

            if status is LoginStatus.STEAM_GUARD:
                console.print("[yellow]SteamGuard code sent by e-mail.[/yellow]")
                guard_code = typer.prompt("SteamGuard code")
                status = await steam.authenticate(username, password, guard_code)

            if status is not LoginStatus.LOGIN_SUCCESSFUL:
                console.print("[red]Login failed[/red]")
                raise typer.Exit(1)

            console.print(f"[green]Logged in as {steam.steamid}[/green]")
            console.print("Access token (export as STEAM_ACCESS_TOKEN):")
            console.print(steam.access_token, markup=False)

    run_async(do_login())


@app.command()
def friends(
    token: str = TOKEN_OPTION,
    details: bool = typer.Option(False, "-l", "--long", help="Fetch nicknames and status"),
):
    """List your friends."""
    from steamchat import SteamClient

    async def list_friends():
        async with SteamClient() as steam:
            await connect(steam, token)
            friend_list = await steam.get_friends()

            table = Table()
            table.add_column("SteamID", style="cyan")
            table.add_column("Friend since")
            if details:
                table.add_column("Nickname")
                table.add_column("Status")
                users = {u.steamid: u for u in await steam.get_user_info(friend_list)}

            for friend in friend_list:
                row = [friend.steamid, friend.friend_since.strftime("%Y-%m-%d")]
                if details:
                    user = users.get(friend.steamid)
                    row += [user.nickname, user.status.name.lower()] if user else ["-", "-"]
                if friend.blocked:
                    row[0] = f"[strike]{row[0]}[/strike]"
                table.add_row(*row)

            console.print(table)

    run_command(list_friends())


@app.command()
def users(
    steamids: List[str] = typer.Argument(..., help="SteamIDs to look up"),
    token: str = TOKEN_OPTION,
):
    """Show user profiles."""
    from steamchat import SteamClient

    async def show_users():
        async with SteamClient() as steam:
            await connect(steam, token)

            table = Table()
            table.add_column("SteamID", style="cyan")
            table.add_column("Nickname")
            table.add_column("Status")
            table.add_column("Profile", style="dim")

            for user in await steam.get_user_info(steamids):
                table.add_row(user.steamid, user.nickname, user.status.name.lower(), user.profile_url)

            console.print(table)

    run_command(show_users())


@app.command()
def groups(token: str = TOKEN_OPTION):
    """List the groups you are a member of."""
    from steamchat import SteamClient

    async def list_groups():
        async with SteamClient() as steam:
            await connect(steam, token)
            group_list = await steam.get_groups()
            if not group_list:
                console.print("[yellow]No groups[/yellow]")
                return

            table = Table()
            table.add_column("Name")
            table.add_column("Members", justify="right")
            table.add_column("Online", justify="right")
            table.add_column("URL", style="dim")

            for info in await steam.get_group_info(group_list):
                table.add_row(info.name, f"{info.members:,}", f"{info.users_online:,}", info.profile_url)

            console.print(table)

    run_command(list_groups())


@app.command()
def send(
    steamid: str = typer.Argument(..., help="Recipient SteamID"),
    message: str = typer.Argument(..., help="Message text"),
    token: str = TOKEN_OPTION,
):
    """Send a message."""
    from steamchat import SteamClient

    async def do_send():
        async with SteamClient() as steam:
            await connect(steam, token)
            if await steam.send_message(steamid, message):
                console.print("[green]Sent[/green]")
            else:
                console.print("[red]Message was not accepted[/red]")
                raise typer.Exit(1)

    run_command(do_send())


@app.command()
def watch(
    token: str = TOKEN_OPTION,
    interval: float = typer.Option(2.0, "--interval", "-i", help="Seconds between polls"),
):
    """Print incoming messages and status changes until interrupted."""
    from steamchat import SteamClient, SteamException

    async def do_watch():
        async with SteamClient() as steam:
            await connect(steam, token)
            steam.on('update', lambda update: console.print(describe(update)))
            console.print(f"[green]Watching as {steam.steamid}, Ctrl+C to stop[/green]")

            while True:
                try:
                    await steam.poll()
                except SteamException as e:
                    console.print(f"[dim]Poll failed: {e}[/dim]")
                await asyncio.sleep(interval)

    try:
        run_async(do_watch())
    except KeyboardInterrupt:
        console.print("[yellow]Stopped[/yellow]")


@app.command(name="server-info")
def server_info():
    """Show the Steam Web API server time."""
    from steamchat import SteamClient, SteamException

    async def show_info():
        async with SteamClient() as steam:
            try:
                info = await steam.get_server_info()
            except SteamException as e:
                console.print(f"[red]Failed: {e}[/red]")
                raise typer.Exit(1)

            console.print(f"[bold]Server time:[/bold] {info.server_time.isoformat()}")
            console.print(f"[bold]Server string:[/bold] {info.server_time_string}")

    run_async(show_info())


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
