from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CalendarTask',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('start_date', models.DateField(help_text='First active day')),
                ('end_date', models.DateField(help_text='Last active day, inclusive')),
                ('related_system', models.CharField(blank=True, default='', max_length=100)),
                ('is_applied', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'ai_analyzed_tasks',
                'ordering': ['start_date', 'id'],
            },
        ),
    ]
