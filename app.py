# app.py
import asyncio
import logging
import urllib.parse

import streamlit as st

from opendraw.config import Settings, load_settings
from opendraw.draw import ShareableReference, parse_names, reveal, run_draw
from opendraw.errors import (
    DerangementUnsatisfiable,
    DrawError,
    DuplicateParticipant,
    InsufficientParticipants,
    InvalidOrTamperedLink,
)
from opendraw.session import SessionStore

# --- Settings from Streamlit secrets ---
try:
    SETTINGS = load_settings(st.secrets)
except FileNotFoundError:
    # no secrets.toml: run with defaults (relative links)
    SETTINGS = Settings()

logging.basicConfig(level=SETTINGS.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("opendraw.app")

# --- App meta ---
st.set_page_config(page_title="Amigo Oculto 🎁", page_icon="🎄", layout="centered")
st.title("Amigo Oculto 🎁")
st.caption("Sorteio sem servidor: cada pessoa recebe um link que só abre com o próprio nome.")

store = SessionStore(st.session_state)


# --- Texts shown to the user ---
def error_message(err: DrawError) -> str:
    if isinstance(err, InsufficientParticipants):
        return f"Informe pelo menos {err.minimum} participantes."
    if isinstance(err, DuplicateParticipant):
        return f"O nome “{err.name}” aparece mais de uma vez na lista."
    if isinstance(err, DerangementUnsatisfiable):
        return "Falha ao sortear: impossível satisfazer as condições. Tente novamente."
    return "Erro ao gerar sorteio."


def whatsapp_url(giver: str, url: str) -> str:
    text = f"Oii {giver}! 🎁\n\nAbra este link para descobrir seu Amigo Oculto:\n{url}"
    return "https://wa.me/?text=" + urllib.parse.quote(text, safe="")


# --- Views ---
def show_links(results):
    st.subheader("Links do sorteio")
    if not SETTINGS.base_url:
        st.warning("BASE_URL não está definido nos Secrets: os links abaixo são só a parte da query. "
                   "Cole-os depois do endereço do app.")
    for result in results:
        with st.container(border=True):
            st.markdown(f"**{result.giver}**")
            st.code(result.url, language=None)
            st.link_button("WhatsApp", whatsapp_url(result.giver, result.url))

    st.divider()
    confirm = st.checkbox("Tenho certeza: apagar o sorteio atual", key="confirm_reset")
    if st.button("Novo sorteio", key="reset", disabled=not confirm):
        store.clear()
        logger.info("Draw cleared by the organizer")
        st.rerun()


def show_result(reference, receiver):
    st.subheader(f"Olá, {reference.giver}!")
    st.success(f"Seu amigo oculto é: **{receiver}**")
    st.info("Guarde segredo! 🤫")


def show_admin():
    st.subheader("Participantes")
    names_text = st.text_area("Um nome por linha", key="names", height=200)
    if not st.button("Sortear", key="generate", type="primary"):
        return

    names = parse_names(names_text)
    try:
        with st.spinner("Criptografando..."):
            results = run_draw(names, base_url=SETTINGS.base_url, timeout=SETTINGS.draw_timeout)
    except DrawError as e:
        logger.info("Draw rejected: %s", type(e).__name__)
        st.error(error_message(e))
        return
    except asyncio.TimeoutError:
        logger.warning("Draw for %d participants timed out", len(names))
        st.error("O sorteio demorou demais. Tente novamente.")
        return

    store.save(results)
    st.rerun()


# --- Which view: stored draw, personal link, or a new draw ---
stored = store.load()
reference = ShareableReference.from_query(st.query_params)

if stored:
    show_links(stored)
elif reference:
    try:
        receiver = reveal(reference)
    except InvalidOrTamperedLink:
        st.error("Link inválido ou adulterado.")
        show_admin()
    else:
        show_result(reference, receiver)
else:
    show_admin()
