"""
Backend startup script for the aquatics gate Flask application.
Run this script to start the Flask server.
"""
from aquagate.application import app
from aquagate.config.config import DEBUG, PORT

if __name__ == '__main__':
    print("=" * 60)
    print("Starting Aquatics Gate Backend Server")
    print("=" * 60)
    print(f"Server: http://localhost:{PORT}")
    print(f"Health: http://localhost:{PORT}/health")
    print(f"Debug Mode: {DEBUG}")
    print("=" * 60)
    print("\nPress CTRL+C to quit\n")

    # Run Flask development server
    app.run(
        host='0.0.0.0',
        port=PORT,
        debug=DEBUG,
        threaded=True
    )
