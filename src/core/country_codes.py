"""Country name to ISO 3166-1 alpha-3 lookup.

Names follow the Portuguese labels used by the reading challenge,
including the spelling variants upstream senders are known to use.
"""

from __future__ import annotations

_COUNTRY_ISO3 = {
    # South America
    "Brasil": "BRA",
    "Guiana Francesa": "GUF",
    "Suriname": "SUR",
    "Guiana": "GUY",
    "Venezuela": "VEN",
    "Colômbia": "COL",
    "Equador": "ECU",
    "Peru": "PER",
    "Bolívia": "BOL",
    "Chile": "CHL",
    "Paraguai": "PRY",
    "Argentina": "ARG",
    "Uruguai": "URY",
    # East and Southeast Asia
    "China": "CHN",
    "Japão": "JPN",
    "Coreia do Sul": "KOR",
    "Coreia do Norte": "PRK",
    "Filipinas": "PHL",
    "Indonésia": "IDN",
    "Butão": "BTN",
    "Mongólia": "MNG",
    "Laos": "LAO",
    "Nepal": "NPL",
    "Vietnã": "VNM",
    "Brunei": "BRN",
    "Malásia": "MYS",
    "Timor Leste": "TLS",
    "Timor-Leste": "TLS",
    "Cazaquistão": "KAZ",
    "Camboja": "KHM",
    "Tailândia": "THA",
    "Mianmar": "MMR",
    "Singapura": "SGP",
    "Taiwan": "TWN",
    # Southern Europe
    "Portugal": "PRT",
    "Espanha": "ESP",
    "França": "FRA",
    "Andorra": "AND",
    "Mônaco": "MCO",
    "Itália": "ITA",
    "Malta": "MLT",
    "Vaticano": "VAT",
    "San Marino": "SMR",
    # Central and Southern Africa
    "Guiné Equatorial": "GNQ",
    "Gabão": "GAB",
    "Congo": "COG",
    "República Democrática do Congo": "COD",
    "Uganda": "UGA",
    "Quênia": "KEN",
    "Ruanda": "RWA",
    "Burundi": "BDI",
    "Tanzânia": "TZA",
    "Angola": "AGO",
    "Zâmbia": "ZMB",
    "Malawi": "MWI",
    "Moçambique": "MOZ",
    "Zimbábue": "ZWE",
    "Botsuana": "BWA",
    "Namíbia": "NAM",
    "África do Sul": "ZAF",
    "Lesoto": "LSO",
    "Essuatíni": "SWZ",
    "Madagascar": "MDG",
    "São Tomé e Príncipe": "STP",
    "Seychelles": "SYC",
    "Comores": "COM",
    # Central America and Caribbean
    "Guatemala": "GTM",
    "Belize": "BLZ",
    "El Salvador": "SLV",
    "Honduras": "HND",
    "Nicarágua": "NIC",
    "Costa Rica": "CRI",
    "Panamá": "PAN",
    "Bahamas": "BHS",
    "Cuba": "CUB",
    "Jamaica": "JAM",
    "Haiti": "HTI",
    "República Dominicana": "DOM",
    "Porto Rico": "PRI",
    "São Cristóvão e Névis": "KNA",
    "Antígua e Barbuda": "ATG",
    "Montserrat": "MSR",
    "Dominica": "DMA",
    "Santa Lúcia": "LCA",
    "Barbados": "BRB",
    "Granada": "GRD",
    "Trindade e Tobago": "TTO",
    "São Vicente e Granadinas": "VCT",
    "São Vicente e Grandinas": "VCT",
    # British Isles and Nordics
    "Reino Unido": "GBR",
    "Inglaterra": "GBR",
    "Escócia": "GBR",
    "País de Gales": "GBR",
    "Irlanda do Norte": "GBR",
    "Irlanda": "IRL",
    "Islândia": "ISL",
    "Noruega": "NOR",
    "Suécia": "SWE",
    "Finlândia": "FIN",
    # North America
    "Canadá": "CAN",
    "Estados Unidos": "USA",
    "Alasca": "USA",
    "México": "MEX",
    "Groenlândia": "GRL",
    "Groelândia": "GRL",
    # Oceania
    "Austrália": "AUS",
    "Papua-Nova Guiné": "PNG",
    "Nova Zelândia": "NZL",
    "Fiji": "FJI",
    "Ilhas Salomão": "SLB",
    "Vanuatu": "VUT",
    "Samoa": "WSM",
    "Kiribati": "KIR",
    "Tonga": "TON",
    "Micronésia": "FSM",
    "Palau": "PLW",
    "Ilhas Marshall": "MHL",
    "Nauru": "NRU",
    "Tuvalu": "TUV",
    # Central Europe
    "Suíça": "CHE",
    "Suiça": "CHE",
    "Bélgica": "BEL",
    "Luxemburgo": "LUX",
    "Países Baixos": "NLD",
    "Holanda": "NLD",
    "Alemanha": "DEU",
    "Dinamarca": "DNK",
    "Polônia": "POL",
    "Tchéquia": "CZE",
    "República Tcheca": "CZE",
    "Áustria": "AUT",
    "Liechtenstein": "LIE",
    # Eastern Europe and Balkans
    "Eslováquia": "SVK",
    "Hungria": "HUN",
    "Eslovênia": "SVN",
    "Croácia": "HRV",
    "Bósnia-Herzegóvina": "BIH",
    "Bósnia e Herzegovina": "BIH",
    "Montenegro": "MNE",
    "Sérvia": "SRB",
    "Albânia": "ALB",
    "Grécia": "GRC",
    "Macedônia do Norte": "MKD",
    "Bulgária": "BGR",
    "Romênia": "ROU",
    "Moldávia": "MDA",
    "Ucrânia": "UKR",
    "Bielorrússia": "BLR",
    "Lituânia": "LTU",
    "Letônia": "LVA",
    "Estônia": "EST",
    "Rússia": "RUS",
    # Northern and Western Africa
    "Marrocos": "MAR",
    "Argélia": "DZA",
    "Tunísia": "TUN",
    "Saara Ocidental": "ESH",
    "Mauritânia": "MRT",
    "Senegal": "SEN",
    "Gâmbia": "GMB",
    "Guiné-Bissau": "GNB",
    "Guiné": "GIN",
    "Serra Leoa": "SLE",
    "Libéria": "LBR",
    "Costa do Marfim": "CIV",
    "Mali": "MLI",
    "Burkina Faso": "BFA",
    "Gana": "GHA",
    "Togo": "TGO",
    "Benin": "BEN",
    "Níger": "NER",
    "Nigéria": "NGA",
    "Líbia": "LBY",
    "Chade": "TCD",
    "Camarões": "CMR",
    "República Centro-Africana": "CAF",
    "Egito": "EGY",
    "Sudão": "SDN",
    "Sudão do Sul": "SSD",
    "Etiópia": "ETH",
    "Somália": "SOM",
    "Eritreia": "ERI",
    "Djibouti": "DJI",
    "Cabo Verde": "CPV",
    # Middle East and South Asia
    "Turquia": "TUR",
    "Chipre": "CYP",
    "Líbano": "LBN",
    "Israel": "ISR",
    "Palestina": "PSE",
    "Jordânia": "JOR",
    "Síria": "SYR",
    "Iraque": "IRQ",
    "Irã": "IRN",
    "Geórgia": "GEO",
    "Armênia": "ARM",
    "Azerbaijão": "AZE",
    "Azerbajão": "AZE",
    "Turcomenistão": "TKM",
    "Uzbequistão": "UZB",
    "Afeganistão": "AFG",
    "Tajiquistão": "TJK",
    "Quirguistão": "KGZ",
    "Paquistão": "PAK",
    "Arábia Saudita": "SAU",
    "Kuwait": "KWT",
    "Bahrein": "BHR",
    "Catar": "QAT",
    "Emirados Árabes": "ARE",
    "Emirados Árabes Unidos": "ARE",
    "Omã": "OMN",
    "Iêmen": "YEM",
    "Índia": "IND",
    "Sri Lanka": "LKA",
    "Maldivas": "MDV",
    "Bangladesh": "BGD",
}


def _normalize_name(name: str) -> str:
    return " ".join(name.casefold().split())


_LOOKUP = {_normalize_name(name): iso3 for name, iso3 in _COUNTRY_ISO3.items()}


def resolve_iso3(country_name: str) -> str | None:
    """Resolve a country name to its ISO3 code.

    Matching ignores case and repeated whitespace.

    Args:
        country_name: Cleaned country name.

    Returns:
        Three-letter code, or None when the name is unknown.
    """
    if not country_name.strip():
        return None
    return _LOOKUP.get(_normalize_name(country_name))


def known_country_names() -> tuple[str, ...]:
    """Return every recognized country label, in table order."""
    return tuple(_COUNTRY_ISO3)
