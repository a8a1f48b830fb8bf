# config/ethnicity_data.py
"""
Census ancestry classification (race → region → specific ethnicity).

Each row is (label, code, parent, race). Top-level race rows are their own
parent. Codes match the columns the resilience edge function aggregates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class EthnicityOption:
    label: str
    code: str
    parent: str
    race: str

    @property
    def is_race(self) -> bool:
        return self.parent == self.code


_ROWS: List[Tuple[str, str, str, str]] = [
    ("Hispanic or Latino (of any race) (H)", "H", "H", "H"),
    ("Mexican", "HMex", "H", "H"),
    ("Central American", "HCA", "H", "H"),
    ("Costa Rican", "HCACstRcn", "HCA", "H"),
    ("Guatemalan", "HCAGutmln", "HCA", "H"),
    ("Honduran", "HCAHndrn", "HCA", "H"),
    ("Nicaraguan", "HCANcrgn", "HCA", "H"),
    ("Panamanian", "HCAPnmn", "HCA", "H"),
    ("Salvadoran", "HCASlvdrn", "HCA", "H"),
    ("South American", "HSA", "H", "H"),
    ("Argentinean", "HSAArgntn", "HSA", "H"),
    ("Bolivian", "HSABlvn", "HSA", "H"),
    ("Chilean", "HSAChln", "HSA", "H"),
    ("Colombian", "HSAClmbn", "HSA", "H"),
    ("Ecuadorian", "HSAEcudrn", "HSA", "H"),
    ("Paraguayan", "HSAPrguyn", "HSA", "H"),
    ("Peruvian", "HSAPrvn", "HSA", "H"),
    ("Uruguayan", "HSAUrgyn", "HSA", "H"),
    ("Venezuelan", "HSAVnzuln", "HSA", "H"),
    ("Caribbean Hispanic", "HCH", "H", "H"),
    ("Cuban", "HCHCuban", "HCH", "H"),
    ("Dominican", "HCHDmncn", "HCH", "H"),
    ("Puerto Rican", "HCHPrtRcn", "HCH", "H"),
    ("Other Hispanic, Latino, or Spanish", "HOth", "HCH", "H"),
    ("Spaniard", "HOthSpnrd", "HCH", "H"),
    ("Spanish", "HOthSpnsh", "HCH", "H"),
    ("Spanish American", "HOthSpnAm", "HCH", "H"),
    ("Garifuna", "HOthGrfna", "HCH", "H"),
    ("White (W)", "W", "W", "W"),
    ("European", "WEur", "W", "W"),
    ("Albanian", "WEurAlbn", "WEur", "W"),
    ("Armenian", "WEurArmn", "WEur", "W"),
    ("Austrian", "WEurAstrn", "WEur", "W"),
    ("Azerbaijani", "WEurAzrbjn", "WEur", "W"),
    ("Belarusian", "WEurBlrsn", "WEur", "W"),
    ("Belgian", "WEurBlgn", "WEur", "W"),
    ("Bosnian and Herzegovinian", "WEurBsHrz", "WEur", "W"),
    ("British", "WEurBrtsh", "WEur", "W"),
    ("Bulgarian", "WEurBlgrn", "WEur", "W"),
    ("Croatian", "WEurCrtn", "WEur", "W"),
    ("Cypriot", "WEurCyprt", "WEur", "W"),
    ("Czech", "WEurCzch", "WEur", "W"),
    ("Danish", "WEurDnsh", "WEur", "W"),
    ("Dutch", "WEurDtch", "WEur", "W"),
    ("English", "WEurEnglsh", "WEur", "W"),
    ("Estonian", "WEurEstn", "WEur", "W"),
    ("Finnish", "WEurFnnsh", "WEur", "W"),
    ("French", "WEurFrnch", "WEur", "W"),
    ("Georgian", "WEurGrgn", "WEur", "W"),
    ("German", "WEurGrmn", "WEur", "W"),
    ("Greek", "WEurGrk", "WEur", "W"),
    ("Hungarian", "WEurHngrn", "WEur", "W"),
    ("Irish", "WEurIrsh", "WEur", "W"),
    ("Italian", "WEurItln", "WEur", "W"),
    ("Kosovan", "WEurKsvn", "WEur", "W"),
    ("Latvian", "WEurLtvn", "WEur", "W"),
    ("Lithuanian", "WEurLthn", "WEur", "W"),
    ("Macedonian", "WEurMcdn", "WEur", "W"),
    ("Maltese", "WEurMlts", "WEur", "W"),
    ("Moldovan", "WEurMldvn", "WEur", "W"),
    ("Montenegrin", "WEurMntgrn", "WEur", "W"),
    ("Norwegian", "WEurNrwgn", "WEur", "W"),
    ("Polish", "WEurPlsh", "WEur", "W"),
    ("Portuguese", "WEurPrtgs", "WEur", "W"),
    ("Romanian", "WEurRmn", "WEur", "W"),
    ("Russian", "WEurRsn", "WEur", "W"),
    ("Scandinavian", "WEurScndvn", "WEur", "W"),
    ("Scots-Irish", "WEurStIrsh", "WEur", "W"),
    ("Scottish", "WEurSctsh", "WEur", "W"),
    ("Serbian", "WEurSrbn", "WEur", "W"),
    ("Slavic", "WEurSlvc", "WEur", "W"),
    ("Slovak", "WEurSlvk", "WEur", "W"),
    ("Slovenian", "WEurSlvn", "WEur", "W"),
    ("Swedish", "WEurSwdsh", "WEur", "W"),
    ("Swiss", "WEurSwiss", "WEur", "W"),
    ("Turkish", "WEurTrksh", "WEur", "W"),
    ("Ukrainian", "WEurUrkrn", "WEur", "W"),
    ("Welsh", "WEurWlsh", "WEur", "W"),
    ("Middle Eastern or North African", "WMENA", "W", "W"),
    ("Algerian", "WMENAAlgrn", "WMENA", "W"),
    ("Arab", "WMENAArab", "WMENA", "W"),
    ("Egyptian", "WMENAEgptn", "WMENA", "W"),
    ("Iranian", "WMENAIrn", "WMENA", "W"),
    ("Iraqi", "WMENAIrq", "WMENA", "W"),
    ("Israeli", "WMENAIsrl", "WMENA", "W"),
    ("Jordanian", "WMENAJrdn", "WMENA", "W"),
    ("Lebanese", "WMENALbns", "WMENA", "W"),
    ("Moroccan", "WMENAMrcn", "WMENA", "W"),
    ("Palestinian", "WMENAPlstn", "WMENA", "W"),
    ("Syrian", "WMENASyrn", "WMENA", "W"),
    ("Tunisian", "WMENATnsn", "WMENA", "W"),
    ("Yemeni", "WMENAYmn", "WMENA", "W"),
    ("Other White", "WOth", "W", "W"),
    ("Australian", "WOthAstrln", "WOth", "W"),
    ("Canadian", "WOthCndn", "WOth", "W"),
    ("French Canadian", "WOthFrCndn", "WOth", "W"),
    ("New Zealander", "WOthNZlndr", "WOth", "W"),
    ("Black or African American (B)", "B", "B", "B"),
    ("African American", "BAfrAm", "B", "B"),
    ("Sub-Saharan African", "BSSAf", "B", "B"),
    ("Burkinabe", "BSSAfBrknb", "BSSAf", "B"),
    ("Cameroonian", "BSSAfCmrn", "BSSAf", "B"),
    ("Congolese", "BSSAfCngls", "BSSAf", "B"),
    ("Ethiopian", "BSSAfEthpn", "BSSAf", "B"),
    ("Gambian", "BSSAfGmbn", "BSSAf", "B"),
    ("Ghanaian", "BSSAfGhn", "BSSAf", "B"),
    ("Guinean", "BSSAfGnn", "BSSAf", "B"),
    ("Ivoirian", "BSSAfIvrn", "BSSAf", "B"),
    ("Kenyan", "BSSAfKnyn", "BSSAf", "B"),
    ("Liberian", "BSSAfLbrn", "BSSAf", "B"),
    ("Malian", "BSSAfMln", "BSSAf", "B"),
    ("Nigerian (Nigeria)", "BSSAfNgrn", "BSSAf", "B"),
    ("Senegalese", "BSSAfSngls", "BSSAf", "B"),
    ("Sierra Leonean", "BSSAfSrLn", "BSSAf", "B"),
    ("South African", "BSSAfSAfr", "BSSAf", "B"),
    ("Sudanese", "BSSAfSdns", "BSSAf", "B"),
    ("Togolese", "BSSAfTgls", "BSSAf", "B"),
    ("Caribbean", "BCrb", "B", "B"),
    ("Antiguan and Barbudan", "BCrbAntBrb", "BCrb", "B"),
    ("Bahamian", "BCrbBhmn", "BCrb", "B"),
    ("Barbadian", "BCrbBrbdn", "BCrb", "B"),
    ("Dominica Islander", "BCrbDmncIs", "BCrb", "B"),
    ("Grenadian", "BCrbGrndn", "BCrb", "B"),
    ("Haitian", "BCrbHtn", "BCrb", "B"),
    ("Jamaican", "BCrbJmcn", "BCrb", "B"),
    ("Kittian and Nevisian", "BCrbKtnNev", "BCrb", "B"),
    ("St. Lucian", "BCrbStLuc", "BCrb", "B"),
    ("Trinidadian and Tobagonian", "BCrbTrTob", "BCrb", "B"),
    ("U.S. Virgin Islander", "BCrbUSVgIs", "BCrb", "B"),
    ("Vincentian", "BCrbVncntn", "BCrb", "B"),
    ("West Indian", "BCrbWind", "BCrb", "B"),
    ("Other Black or African American", "BOth", "B", "B"),
    ("American Indian and Alaska Native (AIANA)", "AIANA", "AIANA", "AIANA"),
    ("Alaska Native", "AIANAlkNtv", "AIANA", "AIANA"),
    ("American Indian", "AIANAIn", "AIANA", "AIANA"),
    ("Blackfeet Tribe of the Blackfeet Indian Reservation of Montana", "AIANAInBfT", "AIANAIn", "AIANA"),
    ("Cherokee", "AIANAInChr", "AIANAIn", "AIANA"),
    ("Central American Indian (all tribes)", "AIANCnAmIn", "AIANA", "AIANA"),
    ("Mexican Indian (all tribes)", "AIANMxIn", "AIANA", "AIANA"),
    ("Aztec", "AIANMxInAz", "AIANMxIn", "AIANA"),
    ("South American Indian (all tribes)", "AIANSAI", "AIANA", "AIANA"),
    ("Ecuadorian Indian", "AIANSAIEcI", "AIANSAI", "AIANA"),
    ("Guyanese South American Indian", "AIANSAIGy", "AIANSAI", "AIANA"),
    ("Inca", "AIANSAIInc", "AIANSAI", "AIANA"),
    ("Caribbean Indian (all tribes)", "AIANCrb", "AIANA", "AIANA"),
    ("Taino", "AIANCrbTno", "AIANCrb", "AIANA"),
    ("Mesoamerican Indian (all tribes)", "AIANMsIn", "AIANA", "AIANA"),
    ("Maya", "AIANMsInMy", "AIANMsIn", "AIANA"),
    ("Asian (A)", "A", "A", "A"),
    ("East Asian", "AEA", "A", "A"),
    ("Chinese, except Taiwanese", "AEAChnsNoT", "AEA", "A"),
    ("Japanese", "AEAJpns", "AEA", "A"),
    ("Korean", "AEAKrn", "AEA", "A"),
    ("Taiwanese", "AEATwns", "AEA", "A"),
    ("Central Asian", "ACA", "A", "A"),
    ("Afghan", "ACAAfghan", "ACA", "A"),
    ("Kazakh", "ACAKazakh", "ACA", "A"),
    ("Kyrgyz", "ACAKyrgyz", "ACA", "A"),
    ("Tajik", "ACATajik", "ACA", "A"),
    ("Uzbek", "ACAUzbek", "ACA", "A"),
    ("South Asian", "ASA", "A", "A"),
    ("Asian Indian", "ASAAsnInd", "ASA", "A"),
    ("Bangladeshi", "ASABngldsh", "ASA", "A"),
    ("Nepalese", "ASANpls", "ASA", "A"),
    ("Pakistani", "ASAPkstn", "ASA", "A"),
    ("Sikh", "ASASikh", "ASA", "A"),
    ("Sri Lankan", "ASASrLnkn", "ASA", "A"),
    ("Southeast Asian", "ASEA", "A", "A"),
    ("Burmese", "ASEABrms", "ASEA", "A"),
    ("Cambodian", "ASEACmbdn", "ASEA", "A"),
    ("Filipino", "ASEAFlpn", "ASEA", "A"),
    ("Indonesian", "ASEAIndnsn", "ASEA", "A"),
    ("Malaysian", "ASEAMlysn", "ASEA", "A"),
    ("Singaporean", "ASEASngprn", "ASEA", "A"),
    ("Thai", "ASEAThai", "ASEA", "A"),
    ("Vietnamese", "ASEAVtnms", "ASEA", "A"),
    ("Other Asian", "AOth", "A", "A"),
    ("Native Hawaiian and Other Pacific Islander (NHPI)", "NHPI", "NHPI", "NHPI"),
    ("Polynesian", "NHPIPly", "NHPI", "NHPI"),
    ("Native Hawaiian", "NHPIPlyNH", "NHPIPly", "NHPI"),
    ("Samoan", "NHPIPlySmn", "NHPIPly", "NHPI"),
    ("Micronesian", "NHPIMc", "NHPI", "NHPI"),
    ("Chamorro", "NHPIMcChmr", "NHPIMc", "NHPI"),
    ("Some Other Race (SOR)", "SOR", "SOR", "SOR"),
    ("Belizean", "SORBlzn", "SOR", "SOR"),
    ("Brazilian", "SORBrzln", "SOR", "SOR"),
    ("Guyanese", "SORGuyans", "SOR", "SOR"),
]

ETHNICITY_DATA: List[EthnicityOption] = [EthnicityOption(*row) for row in _ROWS]

ETHNICITY_BY_CODE: Dict[str, EthnicityOption] = {opt.code: opt for opt in ETHNICITY_DATA}

# Common names → codes. Keys are normalized (lowercase letters only).
# Broad names map to region codes, never to the race root, so a later
# specific pick can be folded into its region.
ETHNICITY_ALIASES: Dict[str, List[str]] = {
    # race level
    "asian": ["AEA", "ASA", "ASEA", "ACA", "AOth"],
    "white": ["WEur", "WMENA", "WOth"],
    "black": ["BSSAf", "BCrb", "BOth"],
    "hispanic": ["HMex", "HCA", "HSA", "HCH", "HOth"],
    "latino": ["HMex", "HCA", "HSA", "HCH", "HOth"],
    "latinx": ["HMex", "HCA", "HSA", "HCH", "HOth"],
    "nativeamerican": ["AIANA"],
    "americanindian": ["AIANA"],
    "pacificislander": ["NHPI"],
    "someotherrace": ["SOR"],
    # regions
    "european": ["WEur"],
    "middleeastern": ["WMENA"],
    "northafrican": ["WMENA"],
    "southasian": ["ASA"],
    "eastasian": ["AEA"],
    "southeastasian": ["ASEA"],
    "centralasian": ["ACA"],
    "caribbean": ["BCrb", "HCH"],
    "subsaharanafrican": ["BSSAf"],
    "africanamerican": ["BAfrAm"],
    # specific groups
    "mexican": ["HMex"],
    "korean": ["AEAKrn"],
    "chinese": ["AEAChnsNoT"],
    "indian": ["ASAAsnInd"],
    "italian": ["WEurItln"],
    "irish": ["WEurIrsh"],
    "german": ["WEurGrmn"],
    "puertorican": ["HCHPrtRcn"],
    "cuban": ["HCHCuban"],
    "dominican": ["HCHDmncn"],
    "arab": ["WMENAArab"],
}


def validate_ethnicity_data() -> None:
    for opt in ETHNICITY_DATA:
        if opt.parent not in ETHNICITY_BY_CODE:
            raise ValueError(f"ethnicity code {opt.code} has unknown parent {opt.parent}")
    for alias, codes in ETHNICITY_ALIASES.items():
        for code in codes:
            if code not in ETHNICITY_BY_CODE:
                raise ValueError(f"alias '{alias}' maps to unknown code {code}")


validate_ethnicity_data()
