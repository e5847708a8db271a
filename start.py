"""
Start the storm impact dashboard API.

Usage
-----
    python start.py               # http://127.0.0.1:5000
    python start.py --port 8080
    python start.py --debug
"""
import argparse

from dashboard.app import create_app


def main():
    parser = argparse.ArgumentParser(description="Serve the storm impact dashboard API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    app = create_app(debug=args.debug)
    print(f"[start] Serving API at http://{args.host}:{args.port}/api/summary", flush=True)
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
