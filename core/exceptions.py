"""
Tratamento de exceções da API.

Todas as respostas de erro seguem o formato {"message": "..."}; erros de
validação de campos também trazem "errors" com o detalhe por campo.
"""
import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _first_message(detail):
    """Extrai a primeira mensagem legível de um detalhe de erro do DRF."""
    if isinstance(detail, dict):
        for value in detail.values():
            return _first_message(value)
        return 'Dados inválidos'
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else 'Dados inválidos'
    return str(detail)


def api_exception_handler(exc, context):
    """
    EXCEPTION_HANDLER do REST_FRAMEWORK.

    - ValidationError do Django vira 400 (serviços levantam essa exceção)
    - Exceções do DRF mantêm o status e ganham o campo "message"
    - Qualquer outra exceção é registrada no log e vira 500
    """
    if isinstance(exc, DjangoValidationError):
        if hasattr(exc, 'message_dict'):
            exc = ValidationError(exc.message_dict)
        else:
            exc = ValidationError(exc.messages)

    response = exception_handler(exc, context)

    if response is None:
        view = context.get('view')
        logger.exception(f"Erro não tratado em {view.__class__.__name__ if view else 'API'}: {exc}")
        return Response(
            {'message': 'Erro interno do servidor'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        response.data = {
            'message': _first_message(exc.detail),
            'errors': exc.detail,
        }
    elif isinstance(response.data, dict) and 'detail' in response.data:
        response.data = {'message': str(response.data['detail'])}
    return response
