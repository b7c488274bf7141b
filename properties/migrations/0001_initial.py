from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('location', models.CharField(max_length=255)),
                ('property_type', models.CharField(choices=[('HOSTEL', 'Hostel'), ('RESIDENT', 'Resident'), ('SHOP', 'Shop')], default='HOSTEL', max_length=20)),
                ('image', models.CharField(blank=True, default='', help_text='Stored image path or URL', max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='properties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Property',
                'verbose_name_plural': 'Properties',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['owner', 'property_type'], name='property_owner_type_idx')],
                'unique_together': {('owner', 'name')},
            },
        ),
    ]
