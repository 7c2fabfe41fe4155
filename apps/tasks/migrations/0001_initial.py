# Generated manually on 2026-10-19

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


def item_fields():
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('title', models.CharField(max_length=200, verbose_name='标题')),
        ('description', models.TextField(verbose_name='描述')),
        ('status', models.CharField(choices=[('未完成', '未完成'), ('进行中', '进行中'), ('有风险', '有风险'), ('已完成', '已完成')], default='未完成', max_length=20, verbose_name='状态')),
        ('company_id', models.CharField(blank=True, max_length=64, null=True, verbose_name='公司ID')),
        ('is_deleted', models.BooleanField(default=False, verbose_name='是否删除')),
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
        ('creator', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='创建者')),
    ]


def assignment_fields(item_model, item_label):
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('position', models.PositiveIntegerField(default=0, verbose_name='顺序')),
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
        ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='关联用户')),
        ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignments', to=item_model, verbose_name=item_label)),
    ]


def comment_fields(item_model, item_label):
    return [
        ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
        ('content', models.TextField(verbose_name='回复内容')),
        ('is_system', models.BooleanField(default=False, verbose_name='系统生成')),
        ('is_deleted', models.BooleanField(default=False, verbose_name='是否删除')),
        ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='创建时间')),
        ('updated_at', models.DateTimeField(auto_now=True, verbose_name='更新时间')),
        ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='回复人')),
        ('item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to=item_model, verbose_name=item_label)),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='WorkTask',
            fields=item_fields(),
            options={
                'verbose_name': '工作项',
                'verbose_name_plural': '工作项',
                'db_table': 'work_tasks',
                'ordering': ['-created_at', '-id'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='Schedule',
            fields=item_fields(),
            options={
                'verbose_name': '日程',
                'verbose_name_plural': '日程',
                'db_table': 'schedules',
                'ordering': ['-created_at', '-id'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='WorkTaskAssignment',
            fields=assignment_fields('tasks.worktask', '工作项'),
            options={
                'verbose_name': '工作项关联人员',
                'verbose_name_plural': '工作项关联人员',
                'db_table': 'work_task_assignments',
                'ordering': ['position', 'id'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='ScheduleAssignment',
            fields=assignment_fields('tasks.schedule', '日程'),
            options={
                'verbose_name': '日程关联人员',
                'verbose_name_plural': '日程关联人员',
                'db_table': 'schedule_assignments',
                'ordering': ['position', 'id'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='WorkTaskComment',
            fields=comment_fields('tasks.worktask', '工作项'),
            options={
                'verbose_name': '工作项回复',
                'verbose_name_plural': '工作项回复',
                'db_table': 'work_task_comments',
                'ordering': ['created_at', 'id'],
                'abstract': False,
            },
        ),
        migrations.CreateModel(
            name='ScheduleComment',
            fields=comment_fields('tasks.schedule', '日程'),
            options={
                'verbose_name': '日程回复',
                'verbose_name_plural': '日程回复',
                'db_table': 'schedule_comments',
                'ordering': ['created_at', 'id'],
                'abstract': False,
            },
        ),
        migrations.AddIndex(
            model_name='worktask',
            index=models.Index(fields=['is_deleted', 'created_at'], name='work_task_alive_idx'),
        ),
        migrations.AddIndex(
            model_name='worktask',
            index=models.Index(fields=['status'], name='work_task_status_idx'),
        ),
        migrations.AddIndex(
            model_name='schedule',
            index=models.Index(fields=['is_deleted', 'created_at'], name='schedule_alive_idx'),
        ),
        migrations.AddIndex(
            model_name='schedule',
            index=models.Index(fields=['status'], name='schedule_status_idx'),
        ),
        migrations.AddConstraint(
            model_name='worktaskassignment',
            constraint=models.UniqueConstraint(fields=('item', 'user'), name='uniq_work_task_assignment'),
        ),
        migrations.AddConstraint(
            model_name='scheduleassignment',
            constraint=models.UniqueConstraint(fields=('item', 'user'), name='uniq_schedule_assignment'),
        ),
    ]
