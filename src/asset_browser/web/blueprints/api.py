"""API blueprint for REST endpoints."""

from datetime import datetime
from pathlib import Path
from flask import Blueprint, request, jsonify, current_app
from ...core.classifier import Category
from ...core.exceptions import (
    FileSystemError, ScanError, ScanInProgressError, ValidationError,
    AccessDeniedError, PathNotFoundError
)
from ...core.models import ALL_CATEGORIES, SortKey

api_bp = Blueprint('api', __name__)

SESSION_EXTENSION = 'asset_session'


def get_session(app=None):
    """Session served by app, or by the current application."""
    return (app if app is not None else current_app).extensions[SESSION_EXTENSION]


def validate_request_data(data, required_fields):
    """
    Validate request data contains required fields.

    Args:
        data: Request data dictionary
        required_fields: List of required field names

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")

    missing_fields = [field for field in required_fields if not data.get(field)]
    if missing_fields:
        raise ValidationError(f"Missing required fields: {', '.join(missing_fields)}")


def handle_api_error(error, operation="operation"):
    """
    Handle API errors and return appropriate JSON response.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed

    Returns:
        Tuple of (response_dict, status_code)
    """
    current_app.logger.warning(f"API error in {operation}: {error}")

    if isinstance(error, ValidationError):
        return {'error': 'Validation error', 'message': str(error)}, 400
    elif isinstance(error, PathNotFoundError):
        return {'error': 'Path not found', 'message': str(error)}, 404
    elif isinstance(error, AccessDeniedError):
        return {'error': 'Permission denied', 'message': str(error)}, 403
    elif isinstance(error, FileSystemError):
        return {'error': 'File system error', 'message': str(error)}, 400
    elif isinstance(error, ScanInProgressError):
        return {'error': 'Scan already in progress', 'message': str(error)}, 409
    elif isinstance(error, ScanError):
        return {'error': 'Scan error', 'message': str(error)}, 400
    else:
        return {'error': 'Internal server error', 'message': 'An unexpected error occurred'}, 500


def _view_payload(session):
    view = session.view
    return {
        'assets': [asset.to_dict() for asset in view],
        'count': len(view),
        'total': len(session.catalog),
        'filters': session.filter_state.to_dict(),
        'status': session.status,
    }


def _validate_text(field, value):
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"Invalid {field}: expected a string or null")
    return value


def _validate_category(value):
    if value in (None, '', ALL_CATEGORIES):
        return ALL_CATEGORIES
    _validate_text('category', value)
    try:
        return Category.from_label(str(value)).value
    except ValueError:
        raise ValidationError(
            f"Invalid category: {value}. Valid categories: {[ALL_CATEGORIES] + [c.value for c in Category]}"
        )


def _validate_sort_key(value):
    if value in (None, ''):
        return SortKey.NAME_ASC
    parsed = SortKey.lookup(str(value))
    if parsed is None:
        raise ValidationError(f"Invalid sort key: {value}. Valid sort keys: {SortKey.labels()}")
    return parsed


FILTER_VALIDATORS = {
    'category': _validate_category,
    'tag': lambda value: _validate_text('tag', value),
    'search_text': lambda value: _validate_text('search_text', value),
    'sort_key': _validate_sort_key,
}


@api_bp.route('/scan', methods=['POST'])
def start_scan():
    """
    Scan a directory and make it the current catalog.

    JSON body:
    - path: Directory path to scan
    """
    try:
        data = request.get_json(silent=True)
        validate_request_data(data, ['path'])

        scan_path = Path(data['path']).expanduser()
        if not scan_path.exists():
            raise PathNotFoundError(f"Directory does not exist: {scan_path}")
        if not scan_path.is_dir():
            raise PathNotFoundError(f"Path is not a directory: {scan_path}")

        session = get_session()
        result = session.load(scan_path)

        return jsonify({
            'message': 'Scan completed',
            'root': result.root,
            'summary': session.summary.to_dict(),
            'status': session.status,
            'total_files': result.total_files,
            'skipped': [entry.to_dict() for entry in result.skipped],
            'skipped_count': result.skipped_count,
            'aborted': result.aborted,
            'duration': result.duration,
        })

    except (ValidationError, FileSystemError, ScanError) as e:
        response_data, status_code = handle_api_error(e, "scan")
        return jsonify(response_data), status_code


@api_bp.route('/assets', methods=['GET'])
def get_assets():
    """Get the current filtered and sorted view."""
    return jsonify(_view_payload(get_session()))


@api_bp.route('/summary', methods=['GET'])
def get_summary():
    """Get summary statistics for the current catalog."""
    return jsonify(get_session().summary.to_dict())


@api_bp.route('/categories', methods=['GET'])
def get_categories():
    """Get the categories present in the current catalog."""
    return jsonify({'categories': get_session().available_categories})


@api_bp.route('/tags', methods=['GET'])
def get_tags():
    """Get the folder tags present in the current catalog."""
    return jsonify({'tags': get_session().available_tags})


@api_bp.route('/sort-options', methods=['GET'])
def get_sort_options():
    """Get the available sort orders."""
    return jsonify({'sort_options': get_session().sort_options})


@api_bp.route('/filters', methods=['GET'])
def get_filters():
    """Get the active filter selection."""
    return jsonify(get_session().filter_state.to_dict())


@api_bp.route('/filters', methods=['PUT'])
def update_filters():
    """
    Change one or more filters and return the new view.

    JSON body (all optional):
    - category: Category label or "All"
    - tag: Folder tag, null to clear
    - search_text: Free text search
    - sort_key: Sort label (e.g. "Size (Largest)") or name (e.g. "size_desc")
    """
    try:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object")

        unknown = [key for key in data if key not in FILTER_VALIDATORS]
        if unknown:
            raise ValidationError(f"Unknown filter fields: {', '.join(unknown)}")

        # Validate everything before the session sees any change.
        changes = {key: FILTER_VALIDATORS[key](value) for key, value in data.items()}

        session = get_session()
        session.update_filters(**changes)
        return jsonify(_view_payload(session))

    except ValidationError as e:
        response_data, status_code = handle_api_error(e, "update filters")
        return jsonify(response_data), status_code


@api_bp.route('/filters/clear', methods=['POST'])
def clear_filters():
    """Reset category, tag, search text and sort order."""
    session = get_session()
    session.clear_filters()
    return jsonify(_view_payload(session))


@api_bp.route('/search/clear', methods=['POST'])
def clear_search():
    """Reset only the search text."""
    session = get_session()
    session.clear_search()
    return jsonify(_view_payload(session))


@api_bp.route('/status', methods=['GET'])
def get_status():
    """Get the session status line."""
    session = get_session()
    return jsonify({
        'status': session.status,
        'root_path': session.root_path,
        'scanning': session.is_scanning,
        'total': len(session.catalog),
        'shown': len(session.view),
    })


@api_bp.route('/health', methods=['GET'])
def health_check():
    """Check that the API is up."""
    return jsonify({
        'status': 'healthy',
        'catalog_loaded': get_session().last_scan is not None,
        'timestamp': datetime.now().isoformat()
    })
