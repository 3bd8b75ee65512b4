"""
Testes das notificações por e-mail.
"""
from datetime import timedelta
from django.utils import timezone

from core.models import Allocation, Document, NotificationSettings, Occurrence, OccurrenceCategory
from core import notifications


class TestRecipients:

    def test_only_active_settings_with_toggle(self, db, subscriber):
        NotificationSettings.objects.create(email='sem-resumo@dica.com.br')
        NotificationSettings.objects.create(email='inativo@dica.com.br', notify_daily_summary=True,
                                            is_active=False)
        assert notifications.get_recipients('daily') == ['gestor@dica.com.br']
        assert sorted(notifications.get_recipients('occurrences')) == [
            'gestor@dica.com.br', 'sem-resumo@dica.com.br',
        ]


class TestSendEmail:

    def test_returns_false_without_recipients(self, db, mailoutbox):
        assert notifications.send_email([], 'Assunto', 'Corpo') is False
        assert len(mailoutbox) == 0

    def test_returns_false_when_not_configured(self, db, settings):
        settings.EMAIL_BACKEND = 'django.core.mail.backends.dummy.EmailBackend'
        assert notifications.send_email(['a@dica.com.br'], 'Assunto', 'Corpo') is False

    def test_new_occurrence_signal(self, db, subscriber, employee, mailoutbox):
        Occurrence.objects.create(date=timezone.localdate(), employee=employee,
                                  description='Chegou atrasado', category=OccurrenceCategory.ISSUE)
        assert len(mailoutbox) == 1
        assert 'Ana Souza' in mailoutbox[0].body


class TestDailySummary:

    def test_skipped_without_issues(self, db, subscriber, mailoutbox):
        assert notifications.send_daily_summary() is None
        assert len(mailoutbox) == 0

    def test_sent_when_post_has_no_allocation(self, db, subscriber, post, mailoutbox):
        summary = notifications.build_daily_summary()
        assert summary['missing_allocations'] == 1

        assert notifications.send_daily_summary() is True
        assert 'Postos sem alocação: 1' in mailoutbox[0].body

    def test_allocated_post_is_not_missing(self, db, post, employee):
        Allocation.objects.create(employee=employee, post=post, date=timezone.localdate())
        assert notifications.build_daily_summary()['missing_allocations'] == 0


class TestDocumentExpiration:

    def test_splits_expired_and_expiring(self, db, subscriber, mailoutbox):
        today = timezone.localdate()
        Document.objects.create(file='documents/a.pdf', original_name='aso_vencido.pdf',
                                document_type='aso', expiration_date=today - timedelta(days=2))
        Document.objects.create(file='documents/b.pdf', original_name='nr10.pdf',
                                document_type='certification', expiration_date=today + timedelta(days=5))
        Document.objects.create(file='documents/c.pdf', original_name='longe.pdf',
                                document_type='contract', expiration_date=today + timedelta(days=90))

        assert notifications.send_document_expiration_notification(30) is True
        assert mailoutbox[0].subject == 'Vencimento de documentos - 1 vencido(s), 1 a vencer'
        assert 'longe.pdf' not in mailoutbox[0].body

    def test_nothing_to_report(self, db, subscriber, mailoutbox):
        assert notifications.send_document_expiration_notification() is False
        assert len(mailoutbox) == 0
