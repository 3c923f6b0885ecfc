"""Finances app package.

Monthly revenue records, entered by hand or recalculated from completed
schedules by a Celery task.
"""
