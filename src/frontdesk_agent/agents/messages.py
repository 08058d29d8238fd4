"""Reply texts sent by the automated front desk."""

from frontdesk_agent.config import settings

MENU = (
    "Selecione uma das opções abaixo:  \n"
    "\n"
    "1️⃣ Saber o andamento do meu processo  \n"
    "2️⃣ Qual valor da consulta?  \n"
    "3️⃣ Agendar horário de atendimento  \n"
    "4️⃣ Conversar com secretaria"
)

FOOTER = (
    "\n\nDeseja mais alguma informação? "
    "Digite *menu* para voltar ou *encerrar* para finalizar."
)

WELCOME = (
    "Olá, espero que esteja bem! 🙋‍♂️\n"
    "Obrigado por entrar em contato com o escritório "
    f"*{settings.office_name}*.  \n"
    "Estamos prontos para ajudá-lo(a) com suas necessidades jurídicas.  \n"
    "\n"
    f"{MENU}  \n"
    "\n"
    '❌ Envie "encerrar" a qualquer momento para finalizar o atendimento.'
)

CLOSING = "❌ Atendimento encerrado. Estamos à disposição sempre que precisar."

# ── Dr. Jonathan (attorney) ──────────────────────────────
CASE_LOOKUP_PROMPT = (
    "📂 *Dr. Jonathan*: Para consultar o andamento do seu processo, por favor "
    "me informe o *número do processo* ou o *nome completo do titular*."
)
FEE_INFO = (
    "💰 *Dr. Jonathan*: O valor da consulta é de R$ 300,00, com duração média "
    "de 1 hora. No atendimento, avaliarei sua situação jurídica e darei as "
    "orientações necessárias." + FOOTER
)
SCHEDULING_PROMPT = (
    "📅 *Dr. Jonathan*: Para agendar um atendimento, por favor, informe sua "
    "disponibilidade de dias e horários."
)
CASE_LOOKUP_ACK = (
    "🔎 *Dr. Jonathan*: Obrigado pelas informações. Em breve retornarei com o "
    "andamento atualizado do processo." + FOOTER
)
SCHEDULING_ACK = (
    "📌 *Dr. Jonathan*: Obrigado! Recebi sua disponibilidade e entrarei em "
    "contato para confirmar o agendamento." + FOOTER
)
ATTORNEY_TAKEOVER = "🙋‍♂️ *Dr. Jonathan*: Estou assumindo novamente seu atendimento."

# ── Ingrid (secretary) ───────────────────────────────────
SECRETARY_GREETING = (
    "👩 *Ingrid (Secretária)*: Olá, eu sou Ingrid, secretária do Dr. Jonathan. "
    "Para que eu possa melhor auxiliar, me diga em que posso te ajudar?"
)
SECRETARY_TAKEOVER = (
    "👩 *Ingrid (Secretária)*: Oi, tudo bem? Assumindo seu atendimento agora. "
    "Como posso te ajudar?"
)
SECRETARY_ACK = (
    "👩 *Ingrid (Secretária)*: Entendido! Já estou verificando para poder te "
    "ajudar da melhor forma." + FOOTER
)

INVALID_OPTION = (
    "⚠️ Opção inválida. Por favor, responda com o número de uma das opções "
    "do menu (1 a 4)." + FOOTER
)


def unavailable_notice(schedule: str) -> str:
    """Notice sent once per closed period when the office is closed."""
    return (
        f"🕒 Olá! Obrigado por entrar em contato com o escritório "
        f"*{settings.office_name}*.\n\n"
        f"No momento estamos fora do horário de atendimento "
        f"({schedule}). "
        "Sua mensagem foi recebida e responderemos assim que possível."
    )
