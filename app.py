import os
import base64
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import RequestEntityTooLarge

import config
from drawing_analysis import analyze, result_to_payload
from excel_output import generate_quote_sheet
from exceptions import InvalidUpload, OCRFailure
from material_mappings import load_material_catalog
from multi_vision import get_provider_status, recognize_text

app = Flask(__name__)
CORS(app)
app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_MB * 1024 * 1024

# Configure logging
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO),
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Loaded once; shared read-only by every request
MATERIAL_CATALOG = load_material_catalog(config.MATERIAL_TABLE_PATH)


def _wants_excel():
    return request.args.get('excel', '').lower() in ('1', 'true', 'yes')


def _requested_quantity(source):
    quantity = source.get('quantity')
    if quantity is None:
        quantity = source.get('stueckzahl')
    return quantity


def read_upload():
    """Validate the multipart upload and return (filename, bytes)."""
    if 'file' not in request.files:
        raise InvalidUpload('No file part in request')

    file = request.files['file']
    if not file or not file.filename:
        raise InvalidUpload('No file selected')

    ext = os.path.splitext(file.filename)[1].lower()
    if ext not in config.ALLOWED_EXTENSIONS:
        raise InvalidUpload(f"Invalid file type. Allowed: {', '.join(sorted(config.ALLOWED_EXTENSIONS))}")

    data = file.read()
    if not data:
        raise InvalidUpload('Uploaded file is empty')
    return file.filename, data


def build_response(result):
    payload = result_to_payload(result)
    if _wants_excel():
        excel_file = generate_quote_sheet(result)
        payload['excel_data'] = base64.b64encode(excel_file.getvalue()).decode('utf-8')
    return payload


@app.errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    logger.warning(f"Upload rejected, larger than {config.MAX_UPLOAD_MB} MB")
    return jsonify({'error': f'File too large (max {config.MAX_UPLOAD_MB} MB)'}), 413


@app.route('/api/analyze', methods=['POST'])
@app.route('/analyze', methods=['POST'])
def upload_and_analyze():
    # 1. Basic request validation
    try:
        filename, file_bytes = read_upload()
    except InvalidUpload as e:
        logger.warning(f"Rejected upload: {e}")
        return jsonify({'error': str(e)}), 400

    quantity = _requested_quantity(request.form)
    logger.info(f"Processing analysis request for file: {filename} (quantity={quantity!r})")

    try:
        # 2. Text recognition
        text = recognize_text(file_bytes, filename=filename)

        # 3. Extraction and estimation
        result = analyze(text, quantity, catalog=MATERIAL_CATALOG, policy=config.COST_POLICY)
        payload = build_response(result)

        logger.info(f"Successfully analyzed drawing: {result.drawing_number or 'Unknown'}")
        return jsonify(payload)

    except OCRFailure as e:
        logger.error(f"OCR failed for {filename}: {e}")
        return jsonify({'error': 'Analysis failed'}), 500
    except Exception:
        logger.exception(f"Error analyzing drawing {filename}")
        return jsonify({'error': 'Analysis failed'}), 500


@app.route('/api/analyze-text', methods=['POST'])
def analyze_text():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400
    text = data.get('text')
    if not isinstance(text, str):
        return jsonify({'error': "Field 'text' must be a string"}), 400

    result = analyze(text, _requested_quantity(data), catalog=MATERIAL_CATALOG, policy=config.COST_POLICY)
    return jsonify(build_response(result))


@app.route('/api/materials', methods=['GET'])
def list_materials():
    return jsonify({
        'source': MATERIAL_CATALOG.source,
        'materials': MATERIAL_CATALOG.to_rows(),
    })


@app.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'providers': get_provider_status()})


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=config.PORT, debug=False)
