import logging
from fastapi import FastAPI
from app.configuration.settings import Configuration
from fastapi.middleware.cors import CORSMiddleware
from app.core.exceptions.app_exception import AppHttpException, app_exception_handler
from app.functions.scheduler.scheduler import start_scheduler

from app.auth.auth import AuthRouter
from app.routes.health.health import HealthRouter
from app.routes.faq.faq import FAQRouter
from app.routes.voucher.voucher import VoucherRouter
from app.routes.payment.payment_method import PaymentMethodRouter

configuration = Configuration()

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logging.info(f"SISTEMA >>> Ambiente carregado: {configuration.environment}")

def create_app():
    """
    Cria e configura a aplicação FastAPI, incluindo middlewares e rotas.
    """
    app = FastAPI(title="Storefront Admin")

    if not configuration.has_supabase():
        logging.warning("SISTEMA >>> SUPABASE_URL/SUPABASE_ANON_KEY ausentes, o banco ficará indisponível")

    if configuration.keep_alive_enabled:
        logging.info(f"SISTEMA >>> Keep-alive ligado para {configuration.keep_alive_url}")
        start_scheduler()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=configuration.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppHttpException, app_exception_handler)

    app.include_router(HealthRouter())
    app.include_router(AuthRouter())

    app.include_router(FAQRouter())
    app.include_router(VoucherRouter())
    app.include_router(PaymentMethodRouter())

    return app
