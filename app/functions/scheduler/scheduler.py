# app/functions/scheduler/scheduler.py
from apscheduler.schedulers.background import BackgroundScheduler

from app.configuration.settings import Configuration
from app.functions.render.ping import keep_alive_ping

configuration = Configuration()

def start_scheduler() -> BackgroundScheduler:
    scheduler = BackgroundScheduler(timezone="UTC")

    # Ping de keep-alive a cada KEEP_ALIVE_MINUTES
    scheduler.add_job(keep_alive_ping, "interval", minutes=configuration.keep_alive_minutes)

    scheduler.start()
    return scheduler
