"""
Rocket.Chat Auth Python SDK - Basic Usage Example

Logs in against a scripted in-memory server, then shows how each kind of
failure surfaces. Point ClientConfig at a real server and drop the transport
argument to talk to Rocket.Chat.
"""

import asyncio
import logging

from rocketchat_auth import (
    ClientConfig,
    ErrorKind,
    InMemoryTransport,
    RocketChatClient,
    RocketChatError,
    TransportError,
)


async def main() -> None:
    transport = InMemoryTransport()
    transport.expect("POST", "/api/v1/login", 200, {
        "status": "success",
        "data": {"userId": "userId", "authToken": "authToken"},
    })
    transport.expect("POST", "/api/v1/login", 401)
    transport.expect("POST", "/api/v1/users.register", 403, {
        "success": False,
        "error": "Email already exists.",
        "errorType": "403",
    })

    async with RocketChatClient(ClientConfig(
        base_url="https://open.rocket.chat",
        transport=transport,
        debug=True,
    )) as client:
        token = await client.login("username", "password")
        print(f"Logged in as: {token.user_id}")

        for attempt in (
            client.login_with_email("user@example.com", "wrong"),
            client.signup("user@example.com", "Test User", "testuser", "password"),
            client.login("username", "password"),
        ):
            try:
                await attempt
            except RocketChatError as e:
                if e.kind is ErrorKind.AUTH:
                    print("Bad credentials")
                elif e.kind is ErrorKind.API:
                    print(f"Rejected: {e.message} (error_type={e.error_type})")
                else:
                    print(f"Server sent garbage: {e.cause!r}")
            except TransportError as e:
                print(f"No response: {e.message}")

        print(f"Still holding token for: {client.get_token().user_id}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    asyncio.run(main())
