"""
Run the web application.
"""
import argparse
import sys
import os

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from webapp.app import app, socketio, initialize_extension


def main():
    parser = argparse.ArgumentParser(description="Plotter engine web host")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    if not initialize_extension():
        print("ERROR: Failed to initialize plotter extension. Exiting.")
        sys.exit(1)

    print("=" * 70)
    print("Plotter Engine - Web Host")
    print("=" * 70)
    print(f"Starting server on http://localhost:{args.port}")
    print(f"Simulated plotter endpoint: http://localhost:{args.port}/api/plotter")
    print("=" * 70)

    socketio.run(app, host=args.host, port=args.port, debug=args.debug,
                 allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
