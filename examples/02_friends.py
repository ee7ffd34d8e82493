"""
Friends and groups - list friends with their profiles and your groups
"""
import asyncio
import os
from steamchat import SteamClient, AvatarSize


async def main():
    async with SteamClient() as steam:
        await steam.authenticate_with_token(os.environ["STEAM_ACCESS_TOKEN"])

        friends = await steam.get_friends()
        print(f"{len(friends)} friends")

        # Any number of ids, fetched 100 per request
        for user in await steam.get_user_info(friends):
            print(f"  {user.nickname:<24} {user.status.name.lower():<8} {user.avatar(AvatarSize.MEDIUM)}")

        groups = await steam.get_groups()
        for info in await steam.get_group_info(groups):
            print(f"  [{info.abbreviation or '-'}] {info.name}: {info.members} members")


if __name__ == "__main__":
    asyncio.run(main())
