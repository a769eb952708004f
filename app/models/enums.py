"""
Dealer Back-Office - Enums
Valores fechados de status, estágios e ações (armazenados como texto)
"""
import enum


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    VENDEDOR = "vendedor"
    CLIENTE = "cliente"


class FunnelStage(str, enum.Enum):
    """Estágio do cliente no funil de vendas"""
    LEAD = "lead"  # legado, exibido como atendimento
    ATENDIMENTO = "atendimento"
    SIMULACAO = "simulacao"
    PROPOSTA = "proposta"
    VENDIDO = "vendido"
    PERDIDO = "perdido"


class VehicleStatus(str, enum.Enum):
    DISPONIVEL = "disponivel"
    RESERVADO = "reservado"
    VENDIDO = "vendido"


class FuelType(str, enum.Enum):
    FLEX = "flex"
    GASOLINA = "gasolina"
    ETANOL = "etanol"
    DIESEL = "diesel"
    ELETRICO = "eletrico"
    HIBRIDO = "hibrido"


class TransmissionType(str, enum.Enum):
    MANUAL = "manual"
    AUTOMATICO = "automatico"
    CVT = "cvt"
    AUTOMATIZADO = "automatizado"


class MaritalStatus(str, enum.Enum):
    SOLTEIRO = "solteiro"
    CASADO = "casado"
    DIVORCIADO = "divorciado"
    VIUVO = "viuvo"
    UNIAO_ESTAVEL = "uniao_estavel"


class ProposalStatus(str, enum.Enum):
    PENDENTE = "pendente"
    APROVADA = "aprovada"
    RECUSADA = "recusada"
    CANCELADA = "cancelada"


class ProposalType(str, enum.Enum):
    FINANCIAMENTO_BANCARIO = "financiamento_bancario"
    FINANCIAMENTO_DIRETO = "financiamento_direto"
    A_VISTA = "a_vista"


class PaymentType(str, enum.Enum):
    """Forma de pagamento do contrato"""
    AVISTA = "avista"
    PARCELADO = "parcelado"


class PaymentMethod(str, enum.Enum):
    DINHEIRO = "dinheiro"
    PIX = "pix"
    CARTAO_DEBITO = "cartao_debito"
    CARTAO_CREDITO = "cartao_credito"
    TRANSFERENCIA = "transferencia"
    BOLETO = "boleto"
    CHEQUE = "cheque"


class PaymentReference(str, enum.Enum):
    ENTRADA = "entrada"
    SINAL = "sinal"
    PARCIAL = "parcial"
    QUITACAO = "quitacao"


class ReservationStatus(str, enum.Enum):
    ATIVA = "ativa"
    CANCELADA = "cancelada"
    CONVERTIDA = "convertida"


class SignatureParty(str, enum.Enum):
    CLIENT = "client"
    VENDOR = "vendor"


class ActivityAction(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    REJECT = "reject"
    CANCEL = "cancel"
    GENERATE_PDF = "generate_pdf"
    SIGN = "sign"
    CONVERT = "convert"
    LOGIN = "login"
    LOGOUT = "logout"


class EntityType(str, enum.Enum):
    VEHICLE = "vehicle"
    CLIENT = "client"
    PROPOSAL = "proposal"
    CONTRACT = "contract"
    RECEIPT = "receipt"
    RESERVATION = "reservation"
    WARRANTY = "warranty"
    TRANSFER = "transfer"
    WITHDRAWAL = "withdrawal"
    SALE = "sale"
    USER = "user"


class DocumentPrefix(str, enum.Enum):
    """Prefixo da numeração de cada tipo de documento"""
    PROPOSAL = "PROP"
    CONTRACT = "CONT"
    WARRANTY = "GAR"
    TRANSFER = "ATPV"
    WITHDRAWAL = "DES"
    RECEIPT = "REC"
    RESERVATION = "RES"


ACTION_LABELS = {
    ActivityAction.CREATE: "Criou",
    ActivityAction.UPDATE: "Atualizou",
    ActivityAction.DELETE: "Excluiu",
    ActivityAction.APPROVE: "Aprovou",
    ActivityAction.REJECT: "Rejeitou",
    ActivityAction.CANCEL: "Cancelou",
    ActivityAction.GENERATE_PDF: "Gerou PDF",
    ActivityAction.SIGN: "Assinou",
    ActivityAction.CONVERT: "Converteu",
    ActivityAction.LOGIN: "Login",
    ActivityAction.LOGOUT: "Logout",
}

ENTITY_LABELS = {
    EntityType.VEHICLE: "Veículo",
    EntityType.CLIENT: "Cliente",
    EntityType.PROPOSAL: "Proposta",
    EntityType.CONTRACT: "Contrato",
    EntityType.RECEIPT: "Recibo",
    EntityType.RESERVATION: "Reserva",
    EntityType.WARRANTY: "Garantia",
    EntityType.TRANSFER: "ATPV",
    EntityType.WITHDRAWAL: "Desistência",
    EntityType.SALE: "Venda",
    EntityType.USER: "Usuário",
}

MARITAL_STATUS_LABELS = {
    MaritalStatus.SOLTEIRO: "Solteiro(a)",
    MaritalStatus.CASADO: "Casado(a)",
    MaritalStatus.DIVORCIADO: "Divorciado(a)",
    MaritalStatus.VIUVO: "Viúvo(a)",
    MaritalStatus.UNIAO_ESTAVEL: "União Estável",
}

FUEL_LABELS = {
    FuelType.FLEX: "Flex",
    FuelType.GASOLINA: "Gasolina",
    FuelType.ETANOL: "Etanol",
    FuelType.DIESEL: "Diesel",
    FuelType.ELETRICO: "Elétrico",
    FuelType.HIBRIDO: "Híbrido",
}

TRANSMISSION_LABELS = {
    TransmissionType.MANUAL: "Manual",
    TransmissionType.AUTOMATICO: "Automático",
    TransmissionType.CVT: "CVT",
    TransmissionType.AUTOMATIZADO: "Automatizado",
}

PAYMENT_METHOD_LABELS = {
    PaymentMethod.DINHEIRO: "Dinheiro",
    PaymentMethod.PIX: "PIX",
    PaymentMethod.CARTAO_DEBITO: "Cartão de Débito",
    PaymentMethod.CARTAO_CREDITO: "Cartão de Crédito",
    PaymentMethod.TRANSFERENCIA: "Transferência Bancária",
    PaymentMethod.BOLETO: "Boleto",
    PaymentMethod.CHEQUE: "Cheque",
}

PAYMENT_REFERENCE_LABELS = {
    PaymentReference.ENTRADA: "Entrada",
    PaymentReference.SINAL: "Sinal",
    PaymentReference.PARCIAL: "Pagamento Parcial",
    PaymentReference.QUITACAO: "Quitação",
}
