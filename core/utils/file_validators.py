"""
Validações de segurança para uploads de arquivo.

Cobre documentos do contrato, anexos de execução de atividades e planilhas
CSV de importação de alocações.
"""
import logging
import os
import re

from django.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

MB = 1024 * 1024
MAX_DOCUMENT_SIZE = 20 * MB
MAX_EXECUTION_ATTACHMENT_SIZE = 10 * MB
MAX_CSV_SIZE = 5 * MB

IMAGE_FORMATS = {
    '.jpg': 'image/jpeg',
    '.jpeg': 'image/jpeg',
    '.png': 'image/png',
    '.gif': 'image/gif',
    '.webp': 'image/webp',
}
OFFICE_FORMATS = {
    '.pdf': 'application/pdf',
    '.doc': 'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    '.xls': 'application/vnd.ms-excel',
    '.xlsx': 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
    '.txt': 'text/plain',
}

ALLOWED_DOCUMENT_EXTENSIONS = list(OFFICE_FORMATS) + list(IMAGE_FORMATS)
ALLOWED_DOCUMENT_TYPES = set(OFFICE_FORMATS.values()) | set(IMAGE_FORMATS.values()) | {'image/jpg'}

ALLOWED_EXECUTION_ATTACHMENT_EXTENSIONS = ['.pdf'] + list(IMAGE_FORMATS)
ALLOWED_EXECUTION_ATTACHMENT_TYPES = {'application/pdf', 'image/jpg'} | set(IMAGE_FORMATS.values())

# Navegadores enviam CSV com tipos variados
ALLOWED_CSV_EXTENSIONS = ['.csv']
ALLOWED_CSV_TYPES = {
    'text/csv', 'text/plain', 'application/csv',
    'application/vnd.ms-excel', 'application/octet-stream',
}

_UNSAFE_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')
MAX_NAME_LENGTH = 100


def sanitize_filename(filename):
    """
    Nome de arquivo seguro para gravação: sem diretórios, sem caracteres de
    controle ou reservados, espaços trocados por "_" e base com no máximo
    MAX_NAME_LENGTH caracteres. Nomes vazios viram "arquivo".
    """
    base = _UNSAFE_CHARS.sub('', os.path.basename(filename or ''))
    base = re.sub(r'\s+', '_', base)
    stem, ext = os.path.splitext(base)
    stem = stem[:MAX_NAME_LENGTH] or 'arquivo'
    return stem + ext


def _validate_upload(file, max_size, allowed_types, allowed_extensions):
    if not file:
        raise ValidationError('Nenhum arquivo fornecido.')

    if getattr(file, 'size', 0) > max_size:
        size_mb = max_size / MB
        raise ValidationError(f'O arquivo é muito grande. Tamanho máximo permitido: {size_mb:.0f}MB.')

    content_type = getattr(file, 'content_type', None)
    if content_type and content_type not in allowed_types:
        raise ValidationError(f'Tipo de arquivo não permitido: {content_type}.')

    filename = getattr(file, 'name', '')
    if filename:
        ext = os.path.splitext(filename.lower())[1]
        if ext not in allowed_extensions:
            raise ValidationError(
                f'Extensão de arquivo não permitida: {ext or "(sem extensão)"}. '
                f'Extensões permitidas: {", ".join(allowed_extensions)}'
            )
        sanitized = sanitize_filename(filename)
        if sanitized != filename:
            file.name = sanitized
            logger.info(f"Nome de arquivo sanitizado: {filename} -> {sanitized}")


def validate_document_file(file, max_size=MAX_DOCUMENT_SIZE):
    """
    Valida arquivo de documento (ASO, certificações, contratos, evidências).

    Raises:
        ValidationError: Se o arquivo não for válido
    """
    _validate_upload(file, max_size, ALLOWED_DOCUMENT_TYPES, ALLOWED_DOCUMENT_EXTENSIONS)


def validate_execution_attachment(file, max_size=MAX_EXECUTION_ATTACHMENT_SIZE):
    """Valida anexo de execução de atividade (imagens ou PDF)."""
    _validate_upload(
        file, max_size,
        ALLOWED_EXECUTION_ATTACHMENT_TYPES, ALLOWED_EXECUTION_ATTACHMENT_EXTENSIONS,
    )


def validate_csv_file(file, max_size=MAX_CSV_SIZE):
    """Valida planilha CSV de importação."""
    _validate_upload(file, max_size, ALLOWED_CSV_TYPES, ALLOWED_CSV_EXTENSIONS)
