"""
Web service
Upload a .feature file, convert it to .docx and download the result
"""

from io import BytesIO
from typing import Any, Dict, Optional

from flask import Flask, jsonify, render_template, request, send_file, url_for
from werkzeug.exceptions import RequestEntityTooLarge

from feature2docx.core.cache_manager import DocumentCache
from feature2docx.core.config_manager import DEFAULT_CONFIG
from feature2docx.core.exceptions import (
    Feature2DocxError,
    FileTooLargeError,
    InvalidFeatureFileError,
    NoScenariosError,
)
from feature2docx.parser.feature_parser import FEATURE_EXTENSION, extract_scenarios, feature_title
from feature2docx.reports.docx_renderer import DOCX_CONTENT_TYPE, DocxRenderer
from feature2docx.utils.helpers import deep_get, format_megabytes, megabytes, sanitize_filename
from feature2docx.utils.logger import setup_logger

logger = setup_logger(__name__)

# Room for multipart boundaries and headers on top of the file itself
MULTIPART_OVERHEAD = 64 * 1024

NOT_FOUND_MESSAGE = 'File not found or has expired. Please convert again.'

ERROR_STATUS = {
    InvalidFeatureFileError: 400,
    FileTooLargeError: 413,
    NoScenariosError: 422,
}


def _status_for(error: Feature2DocxError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status
    return 500


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """Build the Flask application from a loaded configuration"""
    config = config or DEFAULT_CONFIG

    max_size = megabytes(deep_get(config, 'upload.max_size_mb', 10))
    field_name = deep_get(config, 'upload.field_name', 'featureFile')
    ttl = int(deep_get(config, 'cache.ttl_seconds', 600))

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = max_size + MULTIPART_OVERHEAD

    cache = DocumentCache(ttl=ttl)
    renderer = DocxRenderer()
    app.extensions['document_cache'] = cache

    def read_feature_upload():
        """Validate the uploaded file and return (filename, text)"""
        upload = request.files.get(field_name)
        if upload is None or not upload.filename:
            return None, None

        filename = upload.filename
        if not filename.lower().endswith(FEATURE_EXTENSION):
            raise InvalidFeatureFileError('Invalid file type. Only .feature files are allowed.',
                                          {'filename': filename})

        content = upload.read()
        if len(content) > max_size:
            raise FileTooLargeError(len(content), max_size, filename)

        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise InvalidFeatureFileError('File is not valid UTF-8 text.', {'filename': filename}) from e

        return filename, text

    @app.errorhandler(Feature2DocxError)
    def handle_conversion_error(error: Feature2DocxError):
        logger.warning(f"Conversion rejected: {error}")
        return jsonify({'message': error.message}), _status_for(error)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error):
        message = FileTooLargeError(request.content_length or 0, max_size).message
        return jsonify({'message': message}), 413

    @app.route('/', methods=['GET'])
    def index():
        return render_template('index.html',
                               field_name=field_name,
                               max_size_mb=format_megabytes(max_size))

    @app.route('/healthz', methods=['GET'])
    def healthz():
        return jsonify({'ok': True}), 200

    @app.route('/upload', methods=['POST'])
    def upload():
        filename, text = read_feature_upload()
        if filename is None:
            return jsonify({'message': 'No file uploaded.'}), 400

        logger.info(f"Converting {filename} ({len(text)} chars)")

        records = extract_scenarios(text)
        title = feature_title(filename)
        try:
            content = renderer.render(records, title)
        except Feature2DocxError:
            raise
        except Exception:
            logger.exception(f"Conversion error for {filename}")
            return jsonify({'message': 'Failed to process the file.'}), 500

        doc_id = cache.put(content, sanitize_filename(f"{title}.docx"))
        logger.info(f"Stored {filename} as {doc_id} ({len(records)} scenarios)")
        return jsonify({'downloadUrl': url_for('download', doc_id=doc_id)})

    @app.route('/download/<doc_id>', methods=['GET'])
    def download(doc_id: str):
        document = cache.get(doc_id)
        if document is None:
            return NOT_FOUND_MESSAGE, 404, {'Content-Type': 'text/plain; charset=utf-8'}

        return send_file(BytesIO(document.content),
                         mimetype=DOCX_CONTENT_TYPE,
                         as_attachment=True,
                         download_name=document.filename)

    return app
