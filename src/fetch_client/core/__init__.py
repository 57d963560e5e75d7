"""Ядро Fetch Client: конфигурация, сборка запроса, транспорт, классификация."""
