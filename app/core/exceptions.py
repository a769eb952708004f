"""
Dealer Back-Office - Domain Errors
Exceções de regra de negócio, convertidas em respostas HTTP pela API
"""
from fastapi import status


class DealerError(Exception):
    """Base para erros de negócio"""
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DealerError):
    """Dados obrigatórios ausentes ou inválidos (nenhuma escrita foi feita)"""
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class NotFoundError(DealerError):
    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(DealerError):
    status_code = status.HTTP_403_FORBIDDEN


class InvalidTransitionError(DealerError):
    """Mudança de status não permitida a partir do status atual"""
    status_code = status.HTTP_409_CONFLICT


class ProposalNotApprovedError(DealerError):
    """Contrato/venda solicitado a partir de proposta não aprovada"""
    status_code = status.HTTP_409_CONFLICT


class RateLimitError(DealerError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS

    def __init__(self, message: str, reset_in_seconds: int = 0):
        super().__init__(message)
        self.reset_in_seconds = reset_in_seconds


class AccountCreationError(DealerError):
    """Falha ao criar conta; mensagem sempre genérica"""
    GENERIC_MESSAGE = "Não foi possível criar a conta. Verifique os dados e tente novamente."

    def __init__(self, message: str = GENERIC_MESSAGE):
        super().__init__(message)
