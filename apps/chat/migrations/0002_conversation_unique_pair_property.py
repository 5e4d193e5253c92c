import django.db.models.functions.comparison
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('chat', '0001_initial'),
    ]

    operations = [
        migrations.AddConstraint(
            model_name='conversation',
            constraint=models.UniqueConstraint(
                django.db.models.functions.comparison.Least('participant1', 'participant2'),
                django.db.models.functions.comparison.Greatest('participant1', 'participant2'),
                django.db.models.functions.comparison.Coalesce('property', models.Value(0), output_field=models.BigIntegerField()),
                name='chat_conversation_unique_pair_property',
            ),
        ),
    ]
