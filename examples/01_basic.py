"""
Basic usage - Login, handle SteamGuard and show your profile
"""
import asyncio
import getpass
from steamchat import SteamClient, LoginStatus


async def main():
    username = input("Username: ")
    password = getpass.getpass("Password: ")

    async with SteamClient() as steam:
        status = await steam.authenticate(username, password)

        # SteamGuard sends a code by e-mail on the first attempt
        if status is LoginStatus.STEAM_GUARD:
            code = input("SteamGuard code: ")
            status = await steam.authenticate(username, password, code)

        if status is not LoginStatus.LOGIN_SUCCESSFUL:
            print("Login failed")
            return

        me = await steam.get_user()
        print(f"Logged in as {me.nickname} ({me.steamid}), {me.status.name.lower()}")

        # Keep this to skip the password next time
        print(f"Access token: {steam.access_token}")


if __name__ == "__main__":
    asyncio.run(main())
