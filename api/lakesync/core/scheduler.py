"""
Scheduler del sync programado (APScheduler).

Un solo job cron que corre en un thread del BackgroundScheduler. El job
relanza errores fatales; APScheduler los reporta via EVENT_JOB_ERROR y aqui
se loguean.
"""
from typing import Callable

from apscheduler.events import EVENT_JOB_ERROR, JobExecutionEvent
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger

from lakesync.application.use_cases.sync_use_cases import RequesterSyncUseCases
from lakesync.shared.exceptions.domain import ConfigurationError


SYNC_JOB_ID = "freshservice_requester_sync"


def run_sync_job() -> None:
    """Funcion que ejecuta el scheduler en cada disparo."""
    RequesterSyncUseCases().run_scheduled_sync()


def build_sync_trigger(schedule: str) -> CronTrigger:
    """
    Construye el trigger cron (formato crontab de 5 campos, UTC).
    
    Raises:
        ConfigurationError: Si la expresion cron es invalida
    """
    try:
        return CronTrigger.from_crontab(schedule, timezone="UTC")
    except ValueError as e:
        raise ConfigurationError(
            "SYNC_SCHEDULE",
            message=f"Expresion cron invalida en SYNC_SCHEDULE '{schedule}': {e}",
        ) from e


def _on_job_error(event: JobExecutionEvent) -> None:
    logger.error(f"Job '{event.job_id}' fallo: {event.exception!r}")


def create_scheduler(
    schedule: str,
    job: Callable[[], None] = run_sync_job,
) -> BackgroundScheduler:
    """
    Crea (sin iniciar) el scheduler con el job de sync registrado.
    
    Args:
        schedule: Expresion crontab, p.ej. "0 */6 * * *"
        job: Callable a ejecutar en cada disparo
        
    Returns:
        BackgroundScheduler: Scheduler listo para start()
    """
    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        job,
        trigger=build_sync_trigger(schedule),
        id=SYNC_JOB_ID,
        name="Sync Lake -> FreshService requesters",
        max_instances=1,
        coalesce=True,
        replace_existing=True,
    )
    scheduler.add_listener(_on_job_error, EVENT_JOB_ERROR)
    return scheduler
