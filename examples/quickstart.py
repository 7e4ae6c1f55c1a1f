"""
Auth Relay Quickstart Example
"""

import json
import os

from auth_relay import RequestRelay, RelayConfig, MainThreadDispatcher, FutureResultChannel


def main():
    config = RelayConfig.from_env(debug=True)
    base_url = os.getenv("AUTH_RELAY_BASE_URL", "https://httpbin.org")
    token = os.getenv("AUTH_RELAY_TOKEN", "tok_test_xxx")

    # Replies are delivered on this thread, like a UI thread
    dispatcher = MainThreadDispatcher()

    with RequestRelay(config, dispatcher=dispatcher) as relay:
        print("Fetching current user...")
        me = FutureResultChannel()
        relay.handle("getAuthMe", {"url": f"{base_url}/bearer", "token": token}, me)
        dispatcher.run_until(lambda: me.replied, timeout=30)
        print(f"  {me.result()}")

        print("Posting payload...")
        posted = FutureResultChannel()
        relay.handle(
            "post",
            {"url": f"{base_url}/post", "token": token, "body": json.dumps({"x": 1})},
            posted,
        )
        dispatcher.run_until(lambda: posted.replied, timeout=30)
        print(f"  {posted.result()}")

        print("Unknown method...")
        print(f"  {relay.submit('delete', {}).result()}")


if __name__ == "__main__":
    main()
