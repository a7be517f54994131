# core/api.py

import datetime
import json
import logging
from decimal import Decimal
from functools import wraps

from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.db import DatabaseError, IntegrityError, OperationalError
from django.http import JsonResponse, QueryDict
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt
from phonenumber_field.phonenumber import PhoneNumber

from .exceptions import ApiError, ValidationFailed

logger = logging.getLogger(__name__)

BODY_METHODS = ('POST', 'PUT', 'PATCH')


class ApiJSONEncoder(DjangoJSONEncoder):
    """Money as JSON numbers, times as HH:MM, phone numbers in E.164."""

    def default(self, o):
        if isinstance(o, Decimal):
            return float(o)
        if isinstance(o, datetime.time):
            return o.strftime('%H:%M')
        if isinstance(o, PhoneNumber):
            return str(o)
        return super().default(o)


# ================= RESPONSE ENVELOPE ====================

def api_response(data=None, message=None, status=200, **extra):
    payload = {'success': True}
    if message:
        payload['message'] = message
    if data is not None:
        payload['data'] = data
    payload.update(extra)
    return JsonResponse(payload, status=status, encoder=ApiJSONEncoder)


def api_error(message, status=400, error=None, **extra):
    payload = {'success': False, 'message': message}
    if error and settings.API_EXPOSE_ERRORS:
        payload['error'] = error
    payload.update(extra)
    return JsonResponse(payload, status=status, encoder=ApiJSONEncoder)


def database_error_response(exc):
    """
    Classifies a store error into a client-facing response. The raw driver
    message only leaves the server when API_EXPOSE_ERRORS is on.
    """
    logger.error("Database error: %s", exc, exc_info=True)
    if isinstance(exc, IntegrityError):
        return api_error('The request conflicts with existing data', status=400, error=str(exc))
    if isinstance(exc, OperationalError):
        return api_error('Database unavailable', status=503, error=str(exc))
    return api_error('Internal Server Error', status=500, error=str(exc))


# ================= REQUEST BODY ====================

def parse_body(request):
    if request.method not in BODY_METHODS or not request.body:
        return {}
    if request.content_type == 'application/x-www-form-urlencoded':
        return QueryDict(request.body).dict()
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ValidationFailed('Request body is not valid JSON')
    if not isinstance(data, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return data


def remap(data, aliases):
    """Renames API keys to model field names."""
    return {aliases.get(key, key): value for key, value in data.items()}


def clean_form(form, aliases=None):
    """
    Returns the cleaned data of a bound form, or raises ValidationFailed
    naming the missing (or otherwise invalid) fields by their API names.
    """
    if form.is_valid():
        return form.cleaned_data

    api_names = {field: key for key, field in (aliases or {}).items()}
    missing, invalid = [], []
    for field, errors in form.errors.as_data().items():
        name = api_names.get(field, field)
        if any(error.code == 'required' for error in errors):
            missing.append(name)
        else:
            invalid.append(name)

    if missing:
        message = f"Required fields: {', '.join(missing)}"
    else:
        message = f"Invalid fields: {', '.join(invalid)}"
    errors = {api_names.get(field, field): messages for field, messages in form.errors.get_json_data().items()}
    raise ValidationFailed(message, errors=errors)


# ================= REQUEST BOUNDARY ====================

def call_api(view_func, request, *args, **kwargs):
    try:
        request.data = parse_body(request)
        return view_func(request, *args, **kwargs)
    except ApiError as exc:
        return api_error(exc.message, status=exc.status_code, **exc.extra)
    except DatabaseError as exc:
        return database_error_response(exc)


def api_view(methods):
    """
    Turns a function into a JSON endpoint: restricts methods, parses the
    body into request.data and converts failures into the error envelope.
    """
    def decorator(view_func):
        @csrf_exempt
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if request.method not in methods:
                return api_error('Method not allowed', status=405)
            return call_api(view_func, request, *args, **kwargs)
        return wrapper
    return decorator


class ApiView(View):
    """Class-based counterpart of api_view."""

    @method_decorator(csrf_exempt)
    def dispatch(self, request, *args, **kwargs):
        return call_api(super().dispatch, request, *args, **kwargs)

    def http_method_not_allowed(self, request, *args, **kwargs):
        return api_error('Method not allowed', status=405)
