import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ApprovalRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('template_id', models.UUIDField(blank=True, null=True)),
                ('template_title', models.CharField(blank=True, default='', max_length=200)),
                ('items', models.JSONField(default=list, help_text='Item definition snapshot')),
                ('title', models.CharField(max_length=200)),
                ('requester_id', models.CharField(db_index=True, max_length=50)),
                ('requester_name', models.CharField(blank=True, default='', max_length=100)),
                ('requester_position', models.CharField(blank=True, default='', max_length=100)),
                ('requester_team', models.CharField(blank=True, default='', max_length=100)),
                ('processor_id', models.CharField(db_index=True, max_length=50)),
                ('processor_name', models.CharField(blank=True, default='', max_length=100)),
                ('processor_position', models.CharField(blank=True, default='', max_length=100)),
                ('processor_team', models.CharField(blank=True, default='', max_length=100)),
                ('employees', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(choices=[('pending', '대기'), ('approved', '승인'), ('rejected', '반려')], default='pending', max_length=20)),
                ('created_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'work_app_requests',
                'ordering': ['-created_at'],
            },
        ),
    ]
