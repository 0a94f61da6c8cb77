from flask import Flask, jsonify
from threading import Thread
from datetime import datetime, timezone


def create_app(bot) -> Flask:
    """Health endpoints for the host's uptime pinger; reads the bot's state, never changes it."""
    app = Flask(__name__)

    @app.route("/")
    def home():
        if bot.is_ready():
            return "Bot is alive!"
        return "Bot is not connected", 503

    @app.route("/api/status")
    def api_status():
        started = bot.start_time
        uptime = None
        if started is not None:
            uptime = str(datetime.now(timezone.utc) - started).split('.')[0]  # Format: HH:MM:SS
        return jsonify({
            "online": bot.is_ready(),
            "uptime": uptime,
            "start_time": started.strftime("%Y-%m-%d %H:%M:%S UTC") if started else None,
        })

    return app


def keep_alive(bot, port: int = 8080, host: str = "0.0.0.0") -> Thread:
    app = create_app(bot)

    def run():
        app.run(host=host, port=port)
    thread = Thread(target=run, name="keep-alive", daemon=True)
    thread.start()
    return thread
