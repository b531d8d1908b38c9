import io
import logging
from datetime import datetime

from flask import Flask, jsonify, request, send_file

from gcashpdfparser import GCashPDFParser, ParserOptions, PDFParseError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 20 * 1024 * 1024  # 20MB max file size
app.config['PARSER_BACKEND'] = 'pymupdf'


@app.route('/')
def index():
  return jsonify({
    'service': 'gcash-pdf-parser',
    'usage': 'POST /parse with multipart fields: file (PDF), password, format (json|csv)',
  })


@app.route('/parse', methods=['POST'])
def parse_statement():
  """Parse an uploaded GCash statement and return JSON or a CSV download."""
  upload = request.files.get('file')
  password = request.form.get('password', '')
  out_format = request.form.get('format', 'json').lower()

  if upload is None or upload.filename == '':
    return jsonify({'success': False, 'error': 'No file uploaded'}), 400
  if not upload.filename.lower().endswith('.pdf'):
    return jsonify({'success': False, 'error': 'Please upload a valid PDF file'}), 400
  if not password:
    return jsonify({'success': False, 'error': 'Please specify the PDF password'}), 400
  if out_format not in ('json', 'csv'):
    return jsonify({'success': False, 'error': f'Unsupported format: {out_format}'}), 400

  options = ParserOptions(backend=app.config['PARSER_BACKEND'])
  parser = GCashPDFParser(upload.read(), password, options)
  try:
    result = parser.parse()
  except PDFParseError as e:
    logger.error(f"Error processing {upload.filename}: {str(e)}")
    return jsonify({'success': False, 'error': str(e)}), 400

  if out_format == 'csv':
    timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    return send_file(
      io.BytesIO(parser.to_csv().encode('utf-8')),
      as_attachment=True,
      download_name=f'gcash_transactions_{timestamp}_{len(result.transactions)}records.csv',
      mimetype='text/csv'
    )

  return jsonify({
    'success': True,
    'transactions': [t.to_dict() for t in result.transactions],
    'header_count': result.header_count,
    'numeric_count': result.numeric_count,
    'mismatch': result.count_mismatch,
    'used_fallback_columns': result.used_fallback_columns,
  })


if __name__ == '__main__':
  app.run(debug=True, host='0.0.0.0', port=5000)
