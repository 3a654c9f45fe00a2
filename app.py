import os
import logging
from datetime import datetime
from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

# Import configuration and processing components
from config import Config
from ai_processor import AnalysisLLM
from document_loader import init_pdf_backend
from errors import ContractAnalyzerError
from pipeline import ContractAnalysisPipeline
from utils import log_error_and_return

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_pipeline(app_config):
    """Initialise the PDF backend and LLM client once, at startup."""
    llm = AnalysisLLM(
        api_key=app_config["OPENAI_API_KEY"],
        model=app_config["ANALYSIS_MODEL"],
        temperature=app_config["ANALYSIS_TEMPERATURE"],
        max_tokens=app_config["ANALYSIS_MAX_TOKENS"],
        timeout=app_config["LLM_TIMEOUT_SECONDS"],
    )
    return ContractAnalysisPipeline(
        pdf_backend=init_pdf_backend(),
        llm=llm,
        upload_folder=app_config["UPLOAD_FOLDER"],
        prompt_text_limit=app_config["PROMPT_TEXT_LIMIT"],
        keyword_threshold=app_config["CONTRACT_KEYWORD_THRESHOLD"],
    )


def create_app(config_overrides=None, pipeline=None):
    """
    Build the Flask application.

    Args:
        config_overrides: Optional mapping applied on top of Config
        pipeline: Optional pre-built ContractAnalysisPipeline (tests)
    """
    # --- FLASK APP SETUP ---
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)
    app.config['MAX_CONTENT_LENGTH'] = app.config['MAX_FILE_SIZE']

    # Cross-Origin Resource Sharing configuration for frontend compatibility
    CORS(app, origins=app.config['ALLOWED_ORIGINS'], supports_credentials=True)

    # File upload directory configuration
    if not os.path.exists(app.config['UPLOAD_FOLDER']):
        os.makedirs(app.config['UPLOAD_FOLDER'])

    if pipeline is None:
        pipeline = build_pipeline(app.config)
    app.extensions['contract_pipeline'] = pipeline

    register_routes(app)
    logger.info("Flask application initialized")
    return app


def register_routes(app):

    # --- API ENDPOINTS ---

    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({
            "status": "OK",
            "message": "Contract Analyzer API is running"
        }), 200

    @app.route('/ping', methods=['GET'])
    def ping():
        """
        Extended health check with server timestamp and API version.
        """
        return jsonify({
            "status": "ok",
            "message": "Contract Analyzer API is running",
            "timestamp": datetime.now().isoformat(),
            "version": app.config['API_VERSION']
        }), 200

    @app.route('/analyze', methods=['POST'])
    def analyze_document():
        """
        Handles contract upload, analysis and result delivery.
        The uploaded file never outlives the request.
        """
        pipeline = app.extensions['contract_pipeline']
        try:
            result = pipeline.analyze_upload(request.files.get('file'))
            logger.info(f"Analysis completed (isContract={result['isContract']})")
            return jsonify(result), 200

        except ContractAnalyzerError as e:
            body, status = log_error_and_return(e.message, e.status_code)
            return jsonify(body), status

        except RequestEntityTooLarge:
            raise

        except Exception:
            # Error details stay in the logs
            logger.exception("Document analysis failed")
            return jsonify({"error": "Analysis failed"}), 500

    @app.errorhandler(RequestEntityTooLarge)
    def file_too_large(e):
        limit_mb = app.config['MAX_FILE_SIZE'] // (1024 * 1024)
        return jsonify({"error": f"File is too large. Maximum upload size is {limit_mb}MB."}), 413


app = create_app()

# --- RUN THE APP ---
if __name__ == '__main__':
    # Application server configuration
    logger.info(f"Starting Contract Analyzer API on {Config.API_HOST}:{Config.API_PORT}")
    app.run(host=Config.API_HOST, port=Config.API_PORT, debug=Config.API_DEBUG)
