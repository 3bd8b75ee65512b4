"""
Geração de arquivos de exportação (CSV e PDF).

CSV usa ';' como separador e BOM UTF-8 para abrir corretamente no Excel.
PDF é gerado com reportlab.
"""
import csv
import io
import json
from datetime import datetime

from django.http import HttpResponse
from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import cm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .services import AuditService


def csv_response(rows, header, filename):
    """Monta HttpResponse de download com as linhas em CSV."""
    output = io.StringIO()
    writer = csv.writer(output, delimiter=';', quotechar='"', quoting=csv.QUOTE_MINIMAL)
    writer.writerow(header)
    for row in rows:
        writer.writerow(row)

    response = HttpResponse(
        output.getvalue().encode('utf-8-sig'),
        content_type='text/csv; charset=utf-8-sig',
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def _json_cell(value):
    if value is None:
        return ''
    return json.dumps(value, ensure_ascii=False)


def _user_label(user):
    if user is None:
        return 'Sistema'
    return user.get_full_name() or user.email or user.username


def audit_logs_csv(logs, filename):
    header = ['Data/Hora', 'Usuário', 'Ação', 'Entidade', 'ID', 'Detalhes', 'Antes', 'Depois']
    rows = (
        [
            log.timestamp.strftime('%d/%m/%Y %H:%M:%S'),
            _user_label(log.user),
            AuditService.ACTION_LABELS.get(log.action, log.action),
            log.entity_type,
            log.entity_id,
            _json_cell(log.details),
            _json_cell(log.diff_before),
            _json_cell(log.diff_after),
        ]
        for log in logs
    )
    return csv_response(rows, header, filename)


def lgpd_logs_csv(logs, filename):
    header = ['Data/Hora', 'Usuário', 'Tipo de Acesso', 'Categoria', 'Entidade', 'ID', 'IP', 'User Agent']
    rows = (
        [
            log.timestamp.strftime('%d/%m/%Y %H:%M:%S'),
            _user_label(log.user),
            log.get_access_type_display(),
            log.get_data_category_display(),
            log.entity_type,
            log.entity_id,
            log.ip_address or '',
            log.user_agent,
        ]
        for log in logs
    )
    return csv_response(rows, header, filename)


def allocations_csv(allocations, filename):
    header = ['Data', 'Posto', 'Colaborador', 'CPF', 'Status', 'Observações']
    rows = (
        [
            a.date.strftime('%d/%m/%Y'),
            a.post.post_code,
            a.employee.name,
            a.employee.cpf,
            a.get_status_display(),
            a.notes,
        ]
        for a in allocations.select_related('post', 'employee')
    )
    return csv_response(rows, header, filename)


def occurrences_csv(occurrences, filename):
    header = ['Data', 'Categoria', 'Colaborador', 'Posto', 'Descrição', 'Tratada']
    rows = (
        [
            o.date.strftime('%d/%m/%Y'),
            o.get_category_display(),
            o.employee.name if o.employee else '',
            o.post.post_code if o.post else '',
            o.description,
            'Sim' if o.treated else 'Não',
        ]
        for o in occurrences.select_related('post', 'employee')
    )
    return csv_response(rows, header, filename)


def previsto_realizado_csv(report, filename):
    header = ['Agrupamento', 'Referência', 'Previsto', 'Realizado', 'Conformidade (%)']
    summary = report['summary']
    rows = [['Total', report['period']['month'], summary['previsto'], summary['realizado'], summary['compliance']]]
    for item in report['by_post']:
        rows.append(['Posto', f"{item['post_code']} - {item['post_name']}",
                     item['previsto'], item['realizado'], item['compliance']])
    for item in report['by_date']:
        rows.append(['Data', item['date'], item['previsto'], item['realizado'], item['compliance']])
    return csv_response(rows, header, filename)


def previsto_realizado_pdf(report, filename):
    """Relatório previsto x realizado em PDF (A4)."""
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=A4,
                            rightMargin=2*cm, leftMargin=2*cm,
                            topMargin=2*cm, bottomMargin=2*cm)
    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=18,
        textColor=colors.HexColor('#2c3e50'),
        spaceAfter=12,
        alignment=TA_CENTER,
        fontName='Helvetica-Bold'
    )
    heading_style = ParagraphStyle(
        'ReportHeading',
        parent=styles['Heading2'],
        fontSize=13,
        textColor=colors.HexColor('#34495e'),
        spaceAfter=8,
        fontName='Helvetica-Bold'
    )
    table_style = TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor('#34495e')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('ALIGN', (1, 0), (-1, -1), 'CENTER'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 6),
        ('TOPPADDING', (0, 0), (-1, -1), 6),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.HexColor('#bdc3c7')),
    ])

    summary = report['summary']
    elements = [
        Paragraph('RELATÓRIO PREVISTO x REALIZADO', title_style),
        Paragraph(f"Competência: {report['period']['month']}", styles['Normal']),
        Paragraph(f"Gerado em: {datetime.now().strftime('%d/%m/%Y às %H:%M')}", styles['Normal']),
        Spacer(1, 0.5*cm),
        Paragraph('RESUMO', heading_style),
    ]
    resumo = Table(
        [['Previsto', 'Realizado', 'Conformidade'],
         [summary['previsto'], summary['realizado'], f"{summary['compliance']}%"]],
        colWidths=[5*cm, 5*cm, 5*cm],
    )
    resumo.setStyle(table_style)
    elements += [resumo, Spacer(1, 0.5*cm)]

    if report['by_post']:
        elements.append(Paragraph('POR POSTO', heading_style))
        data = [['Posto', 'Previsto', 'Realizado', 'Conformidade']]
        for item in report['by_post']:
            data.append([f"{item['post_code']} - {item['post_name']}"[:45],
                         item['previsto'], item['realizado'], f"{item['compliance']}%"])
        table = Table(data, colWidths=[8*cm, 3*cm, 3*cm, 3*cm], repeatRows=1)
        table.setStyle(table_style)
        elements += [table, Spacer(1, 0.5*cm)]

    if report['by_date']:
        elements.append(Paragraph('POR DIA', heading_style))
        data = [['Data', 'Previsto', 'Realizado', 'Conformidade']]
        for item in report['by_date']:
            data.append([item['date'], item['previsto'], item['realizado'], f"{item['compliance']}%"])
        table = Table(data, colWidths=[5*cm, 3*cm, 3*cm, 3*cm], repeatRows=1)
        table.setStyle(table_style)
        elements.append(table)

    doc.build(elements)
    buffer.seek(0)
    response = HttpResponse(buffer.read(), content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
