import requests
import logging

from app.configuration.settings import Configuration

configuration = Configuration()

def keep_alive_ping():
    """Chama o health check para o projeto do Supabase não ser pausado por inatividade."""
    try:
        response = requests.get(configuration.keep_alive_url, timeout=30)
        if response.status_code == 200:
            logging.info("SISTEMA >>> Ping de keep-alive -> OK")
        else:
            logging.warning(f"SISTEMA >>> Ping de keep-alive deu status -> {response.status_code}")
    except requests.RequestException as e:
        logging.error(f"SISTEMA >>> Erro no ping de keep-alive -> {e}")
