"""
Dealer Back-Office - CLI Admin
Ferramenta de linha de comando para operar a loja

Uso:
    python admin_cli.py login
    python admin_cli.py setup
    python admin_cli.py clients list
    python admin_cli.py clients funnel
    python admin_cli.py clients stage <client_id> <estagio>
    python admin_cli.py proposals status <proposal_id> <status>
    python admin_cli.py reservations list [--expired]
"""
import os
import sys
import httpx
from pathlib import Path

BASE_URL = os.getenv("DEALER_API_URL", "http://localhost:8080")
TOKEN_FILE = Path(".admin_token")


def save_token(token: str):
    TOKEN_FILE.write_text(token)


def load_token() -> str:
    if TOKEN_FILE.exists():
        return TOKEN_FILE.read_text().strip()
    return None


def get_headers():
    token = load_token()
    if not token:
        print("Erro: Faça login primeiro com 'python admin_cli.py login'")
        sys.exit(1)
    return {"Authorization": f"Bearer {token}"}


def error_detail(response: httpx.Response) -> str:
    try:
        return response.json().get("detail", response.text)
    except ValueError:
        return response.text


def cmd_login():
    """Login no sistema"""
    email = input("Email [admin@autosdaserra.com.br]: ").strip() or "admin@autosdaserra.com.br"
    password = input("Senha: ").strip()

    try:
        response = httpx.post(
            f"{BASE_URL}/api/auth/login",
            json={"email": email, "password": password}
        )
        if response.status_code == 200:
            data = response.json()
            save_token(data["access_token"])
            print("\n✓ Login bem sucedido!")
            print(f"  Usuário: {data['user']['email']} ({data['user']['role']})")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")


def cmd_setup():
    """Cria o primeiro administrador (dados da configuração do servidor)"""
    try:
        response = httpx.post(f"{BASE_URL}/api/auth/setup")
        if response.status_code == 200:
            print(f"✓ Administrador criado: {response.json()['email']}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro de conexão: {e}")


def cmd_clients_list():
    """Lista clientes"""
    try:
        response = httpx.get(f"{BASE_URL}/api/clients", headers=get_headers())
        if response.status_code == 200:
            clients = response.json()
            print(f"\n{'='*80}")
            print(f"{'ID':<36} | {'Nome':<24} | {'Estágio':<12}")
            print(f"{'='*80}")
            for c in clients:
                print(f"{c['id']:<36} | {c['name'][:24]:<24} | {c['effective_stage']:<12}")
            print(f"\nTotal: {len(clients)} clientes")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_clients_funnel():
    """Quadro do funil"""
    try:
        response = httpx.get(f"{BASE_URL}/api/clients/funnel", headers=get_headers())
        if response.status_code == 200:
            for column in response.json():
                print(f"\n{column['label']} ({column['count']})")
                print("-" * 40)
                for c in column["clients"]:
                    print(f"  {c['name']}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_clients_stage(client_id: str, stage: str):
    """Move cliente no funil"""
    try:
        response = httpx.patch(
            f"{BASE_URL}/api/clients/{client_id}/stage",
            json={"stage": stage},
            headers=get_headers()
        )
        if response.status_code == 200:
            data = response.json()
            if data["changed"]:
                print(f"✓ {data['client']['name']} movido para {stage}")
            else:
                print(f"  {data['client']['name']} já está em {stage}")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_proposals_status(proposal_id: str, status: str):
    """Aprova, recusa ou cancela proposta"""
    try:
        response = httpx.patch(
            f"{BASE_URL}/api/proposals/{proposal_id}/status",
            json={"status": status},
            headers=get_headers()
        )
        if response.status_code == 200:
            data = response.json()
            print(f"✓ Proposta {data['proposal']['proposal_number']}: {status} ({data['action']})")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def cmd_reservations_list(expired: bool = False):
    """Lista reservas"""
    try:
        response = httpx.get(
            f"{BASE_URL}/api/reservations",
            params={"expired": "true"} if expired else None,
            headers=get_headers()
        )
        if response.status_code == 200:
            reservations = response.json()
            print(f"\n{'='*70}")
            print(f"{'Número':<22} | {'Status':<10} | {'Validade':<10} | Vencida")
            print(f"{'='*70}")
            for r in reservations:
                flag = "sim" if r["is_expired"] else ""
                print(f"{r['reservation_number']:<22} | {r['status']:<10} | {r['valid_until']:<10} | {flag}")
            print(f"\nTotal: {len(reservations)} reservas")
        else:
            print(f"✗ Erro: {error_detail(response)}")
    except httpx.HTTPError as e:
        print(f"✗ Erro: {e}")


def print_help():
    print("""
Dealer Back-Office - CLI Admin
==============================

Comandos disponíveis:

  python admin_cli.py login                                  - Fazer login
  python admin_cli.py setup                                  - Criar primeiro administrador

  python admin_cli.py clients list                           - Listar clientes
  python admin_cli.py clients funnel                         - Quadro do funil
  python admin_cli.py clients stage <id> <estagio>           - Mover cliente
                                                               Estágios: atendimento, simulacao,
                                                               proposta, vendido, perdido

  python admin_cli.py proposals status <id> <status>         - Alterar status da proposta
                                                               Status: pendente, aprovada,
                                                               recusada, cancelada

  python admin_cli.py reservations list [--expired]          - Listar reservas
""")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print_help()
        sys.exit(0)

    cmd = sys.argv[1].lower()

    if cmd == "login":
        cmd_login()
    elif cmd == "setup":
        cmd_setup()
    elif cmd == "clients":
        if len(sys.argv) < 3:
            print("Uso: clients [list|funnel|stage]")
        elif sys.argv[2] == "list":
            cmd_clients_list()
        elif sys.argv[2] == "funnel":
            cmd_clients_funnel()
        elif sys.argv[2] == "stage" and len(sys.argv) >= 5:
            cmd_clients_stage(sys.argv[3], sys.argv[4])
        else:
            print("Uso: clients stage <client_id> <estagio>")
    elif cmd == "proposals":
        if len(sys.argv) >= 5 and sys.argv[2] == "status":
            cmd_proposals_status(sys.argv[3], sys.argv[4])
        else:
            print("Uso: proposals status <proposal_id> <status>")
    elif cmd == "reservations":
        if len(sys.argv) >= 3 and sys.argv[2] == "list":
            cmd_reservations_list("--expired" in sys.argv[3:])
        else:
            print("Uso: reservations list [--expired]")
    elif cmd == "help":
        print_help()
    else:
        print(f"Comando desconhecido: {cmd}")
        print_help()
