"""Sign-in / sign-up form."""
import streamlit as st

from app.state.session import SessionStateManager
from escala.errors import AuthError, StoreError


def render_login(state: SessionStateManager):
    """Render the authentication form. Signing in triggers the session-change listener."""
    is_login = state.login_mode == "login"

    _, center, _ = st.columns([1, 2, 1])
    with center:
        st.header("📅 Sistema de Escala")
        st.caption("Bem-vindo de volta! Entre na sua conta." if is_login
                   else "Crie sua conta para gerenciar escalas.")

        with st.form("auth_form"):
            full_name = "" if is_login else st.text_input("Nome completo", placeholder="Seu nome")
            email = st.text_input("E-mail", placeholder="seu@email.com")
            password = st.text_input("Senha", type="password")
            submitted = st.form_submit_button("Entrar" if is_login else "Cadastrar", type="primary")

        if submitted:
            try:
                if is_login:
                    state.auth.sign_in(email, password)
                    st.rerun()
                else:
                    state.auth.sign_up(email, password, full_name=full_name)
                    state.login_mode = "login"
                    state.flash("success", "Cadastro realizado! Entre com seu e-mail e senha.")
                    st.rerun()
            except AuthError as e:
                st.error(str(e))
            except StoreError as e:
                st.error(f"Ocorreu um erro na autenticação: {e}")

        toggle_label = "Não tem uma conta? Cadastre-se" if is_login else "Já tem uma conta? Entre aqui"
        if st.button(toggle_label, key="toggle_login_mode"):
            state.login_mode = "signup" if is_login else "login"
            st.rerun()
