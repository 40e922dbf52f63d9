"""
CrystalCounter — Flask entrypoint
"""

import sys
from flask import Flask

from crystal_counter import config
from crystal_counter.api.routes import bp as api_bp
from crystal_counter.kernel.visitor_store import VisitorStore

def create_app(data_file=None, ip_header=None) -> Flask:
    app = Flask(__name__)
    app.config["DATA_FILE"] = data_file or config.get_data_file()
    app.config["IP_HEADER"] = ip_header or config.get_ip_header()
    # one store per app so every request shares its write lock
    app.extensions["visitor_store"] = VisitorStore(app.config["DATA_FILE"])
    app.register_blueprint(api_bp)
    return app

app = create_app()

if __name__ == "__main__":
    port = config.get_port()
    if "--port" in sys.argv:
        try:
            i = sys.argv.index("--port")
            port = int(sys.argv[i+1])
        except (IndexError, ValueError):
            pass
    print(f"[CrystalCounter] running at http://0.0.0.0:{port}")
    app.run(host="0.0.0.0", port=port, debug=False)
