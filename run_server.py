import os

import uvicorn


def main():
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "7071"))
    print(f"\nProxy API listening on http://{host}:{port}")
    print("Press CTRL+C to stop.\n")
    uvicorn.run("custom_proxy.api.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
