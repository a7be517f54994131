# core/views.py

import logging

from django.conf import settings
from django.db import connection
from django.utils import timezone

from .api import api_error, api_view, api_response
from .database import server_time
from .exceptions import Forbidden, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

FORBIDDEN_KEYWORDS = ['DROP DATABASE', 'DROP USER', 'CREATE USER', 'ALTER USER', 'GRANT', 'REVOKE']
QUERY_TYPES = ['SELECT', 'INSERT', 'UPDATE', 'DELETE', 'CREATE', 'ALTER', 'DROP']


# --- Health checks ---
@api_view(['GET'])
def api_status_view(request):
    return api_response(message='API is running!', timestamp=timezone.now())


@api_view(['GET'])
def database_status_view(request):
    return api_response(message='Database connection successful', serverTime=server_time())


# --- Ad-hoc SQL console ---
@api_view(['POST'])
def sql_console_view(request):
    """
    Runs caller-supplied SQL. Only reachable when ENABLE_SQL_CONSOLE is set;
    otherwise the route does not exist.
    """
    if not settings.ENABLE_SQL_CONSOLE:
        raise NotFound('Route not found')

    query = request.data.get('query')
    if not query or not isinstance(query, str):
        raise ValidationFailed('Query is required')

    upper_query = query.strip().upper()
    for keyword in FORBIDDEN_KEYWORDS:
        if keyword in upper_query:
            raise Forbidden(f'Query contains forbidden keyword: {keyword}')

    query_type = next((kind for kind in QUERY_TYPES if upper_query.startswith(kind)), 'UNKNOWN')
    logger.warning("SQL console executing %s statement", query_type)

    with connection.cursor() as cursor:
        cursor.execute(query)
        columns = [col[0] for col in cursor.description] if cursor.description else []
        rows = [dict(zip(columns, row)) for row in cursor.fetchall()] if columns else []
        rows_affected = cursor.rowcount

    extra = {
        'queryType': query_type,
        'columns': columns,
        'rows': rows,
        'rowCount': len(rows),
    }
    if query_type != 'SELECT':
        extra['rowsAffected'] = max(rows_affected, 0)
    return api_response(message='Query executed successfully', **extra)


# --- Error handlers ---
def route_not_found_view(request, exception=None):
    return api_error('Route not found', status=404)


def server_error_view(request):
    return api_error('Internal Server Error', status=500)
