"""
Echo bot - poll for messages and answer them
"""
import asyncio
import logging
import os
from steamchat import SteamClient, SteamException, MessageUpdate

logging.basicConfig(level=logging.INFO)


async def main():
    async with SteamClient() as steam:
        await steam.authenticate_with_token(os.environ["STEAM_ACCESS_TOKEN"])

        replies = []

        def on_message(update: MessageUpdate):
            # Our own messages come back as local updates
            if not update.local:
                replies.append((update.origin, update.text))

        steam.on('message', on_message)

        while True:
            try:
                await steam.poll()
            except SteamException as e:
                logging.warning(f"Poll failed: {e}")

            # Sends and polls share the session cursor: never overlap them
            while replies:
                origin, text = replies.pop(0)
                await steam.send_typing_notification(origin)
                await steam.send_message(origin, f"You said: {text}")

            await asyncio.sleep(2)


if __name__ == "__main__":
    asyncio.run(main())
