"""
Dealer Back-Office - Services
Regras de negócio usadas pelos routers
"""
