"""User-facing messages for domain errors, per locale."""

from couponhub.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "pt-BR": {
        "identity_incomplete": (
            "Seu cadastro está incompleto. Informe nome, e-mail e telefone para resgatar cupons."
        ),
        "invalid_token_format": "Informe um token válido de 6 caracteres.",
        "not_found": "Nenhum registro encontrado.",
        "out_of_stock": "Este cupom esgotou.",
        "already_redeemed": "Você já resgatou este cupom.",
        "already_resolved": "Este cupom já foi validado ou invalidado.",
        "redemption_conflict": "Não foi possível concluir o resgate. Tente novamente.",
        "not_owner": "Você não tem permissão para alterar este cupom.",
        "already_exists": "Já existe uma conta com este e-mail.",
        "invalid_email": "Informe um e-mail válido.",
        "collaborator_unavailable": "Serviço indisponível no momento. Tente novamente mais tarde.",
        "error": "Não foi possível concluir a operação.",
    },
    "en": {
        "identity_incomplete": (
            "Your profile is incomplete. Add your name, email and phone to redeem coupons."
        ),
        "invalid_token_format": "Enter a valid 6-character token.",
        "not_found": "No matching record was found.",
        "out_of_stock": "This coupon is sold out.",
        "already_redeemed": "You have already redeemed this coupon.",
        "already_resolved": "This coupon has already been validated or rejected.",
        "redemption_conflict": "The redemption could not be completed. Please try again.",
        "not_owner": "You are not allowed to change this coupon.",
        "already_exists": "An account with this email already exists.",
        "invalid_email": "Enter a valid email address.",
        "collaborator_unavailable": "The service is temporarily unavailable. Please try again later.",
        "error": "The operation could not be completed.",
    },
}


def resolve_locale(accept_language: str | None) -> str:
    """Pick the first supported locale from an Accept-Language header.

    Matches exact tags first ("pt-BR"), then the primary language ("pt" -> "pt-BR").
    Quality values are ignored; header order is taken as preference order.
    """
    if not accept_language:
        return settings.default_locale

    for part in accept_language.split(","):
        tag = part.split(";")[0].strip()
        if not tag:
            continue
        for locale in MESSAGES:
            if locale.lower() == tag.lower():
                return locale
        primary = tag.split("-")[0].lower()
        for locale in MESSAGES:
            if locale.split("-")[0].lower() == primary:
                return locale

    return settings.default_locale


def get_message(code: str, locale: str | None = None) -> str:
    """Return the localized message for an error code."""
    catalog = MESSAGES.get(locale or settings.default_locale) or MESSAGES["pt-BR"]
    return catalog.get(code, catalog["error"])
