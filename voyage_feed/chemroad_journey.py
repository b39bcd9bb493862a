"""
voyage_feed/chemroad_journey.py
Static feed for CHEMROAD JOURNEY voyage 124 (Kuala Tanjung -> Kandla -> Port Qasim).

Figures are transcribed from the laytime statements.  Each event's duration
is the elapsed time until the next event; "0m" marks an instant and
"ongoing" an open block that is never summed.
"""

VESSEL_INFO = {
    "vessel": "CHEMROAD JOURNEY",
    "voyage": 124,
    "total_voyage_duration": "22 days",
    "ports": ["Kuala Tanjung", "Kandla", "Port Qasim"],
}

ABBREVIATIONS = {
    "chemicals": {
        "Fatty Acid":   "FA",
        "Stearin":      "STE",
        "Palm Olein":   "PO",
        "Palm Oil":     "PO",
        "Palm Stearin": "PS",
        "Soft Stearin": "SS",
    },
    "ports": {
        "Kuala Tanjung": "IDKTG",
        "Kandla":        "INKDL",
        "Port Qasim":    "PKPQM",
        "Unknown":       "UNK",
    },
}

CHARTER_TERMS = {
    "primary_charterer": "UNILEVER",
    "allowed_hours": 106.735747,     # 4.447322 days
    "daily_rate": 24000,
    "currency": "USD",
}

# Parcel granularity: one row per charterer's parcel.
CARGOES = {
    "CARGO1": {
        "name": "Fatty Acid", "abbreviation": "FA", "charterer": "UNILEVER",
        "quantity": "5,001.866 MT",
        "load_port": "Kuala Tanjung", "discharge_port": "Kandla",
        "tanks": ["5P", "7W"],
    },
    "CARGO2": {
        "name": "Stearin", "abbreviation": "STE", "charterer": "UNILEVER",
        "quantity": "3,003.315 MT",
        "load_port": "Kuala Tanjung", "discharge_port": "Port Qasim",
        "tanks": ["5S", "6P"],
    },
    "OTHER_4S": {
        "name": "Palm Stearin", "abbreviation": "PS", "charterer": "OTHER",
        "quantity": "4,250.118 MT",
        "load_port": "Unknown", "discharge_port": "Port Qasim",
        "tanks": ["4S"],
    },
    "OTHER_6S": {
        "name": "Soft Stearin", "abbreviation": "SS", "charterer": "OTHER",
        "quantity": "3,998.405 MT",
        "load_port": "Unknown", "discharge_port": "Port Qasim",
        "tanks": ["6S"],
    },
    "OTHER_8W": {
        "name": "Palm Olein", "abbreviation": "PO", "charterer": "OTHER",
        "quantity": "6,002.500 MT",
        "load_port": "Unknown", "discharge_port": "Port Qasim",
        "tanks": ["8W"],
    },
    "OTHER_9W": {
        "name": "Palm Oil", "abbreviation": "PO", "charterer": "OTHER",
        "quantity": "5,750.200 MT",
        "load_port": "Unknown", "discharge_port": "Port Qasim",
        "tanks": ["9W"],
    },
}

# Tank granularity: one row per physical tank, repeating the parcel quantity.
TANKS = {
    "5P": {"name": "Fatty Acid", "abbreviation": "FA", "charterer": "UNILEVER", "quantity": "5,001.866 MT",
           "load_port": "Kuala Tanjung", "discharge_port": "Kandla", "tank": "5P", "parent_cargo": "CARGO1"},
    "7W": {"name": "Fatty Acid", "abbreviation": "FA", "charterer": "UNILEVER", "quantity": "5,001.866 MT",
           "load_port": "Kuala Tanjung", "discharge_port": "Kandla", "tank": "7W", "parent_cargo": "CARGO1"},
    "5S": {"name": "Stearin", "abbreviation": "STE", "charterer": "UNILEVER", "quantity": "3,003.315 MT",
           "load_port": "Kuala Tanjung", "discharge_port": "Port Qasim", "tank": "5S", "parent_cargo": "CARGO2"},
    "6P": {"name": "Stearin", "abbreviation": "STE", "charterer": "UNILEVER", "quantity": "3,003.315 MT",
           "load_port": "Kuala Tanjung", "discharge_port": "Port Qasim", "tank": "6P", "parent_cargo": "CARGO2"},
    "4S": {"name": "Palm Stearin", "abbreviation": "PS", "charterer": "OTHER", "quantity": "4,250.118 MT",
           "load_port": "Unknown", "discharge_port": "Port Qasim", "tank": "4S", "parent_cargo": "OTHER_4S"},
    "6S": {"name": "Soft Stearin", "abbreviation": "SS", "charterer": "OTHER", "quantity": "3,998.405 MT",
           "load_port": "Unknown", "discharge_port": "Port Qasim", "tank": "6S", "parent_cargo": "OTHER_6S"},
    "8W": {"name": "Palm Olein", "abbreviation": "PO", "charterer": "OTHER", "quantity": "6,002.500 MT",
           "load_port": "Unknown", "discharge_port": "Port Qasim", "tank": "8W", "parent_cargo": "OTHER_8W"},
    "9W": {"name": "Palm Oil", "abbreviation": "PO", "charterer": "OTHER", "quantity": "5,750.200 MT",
           "load_port": "Unknown", "discharge_port": "Port Qasim", "tank": "9W", "parent_cargo": "OTHER_9W"},
}

_KT_CARGOES = ["CARGO1", "CARGO2"]
_PQ_CARGOES = ["CARGO2", "OTHER_4S", "OTHER_6S", "OTHER_8W", "OTHER_9W"]
_PQ_OTHERS = ["OTHER_4S", "OTHER_6S", "OTHER_8W", "OTHER_9W"]

PORT_OPERATIONS = {
    "Kuala Tanjung": {
        "country": "Indonesia",
        "berth": "KTMT",
        "un_locode": "IDKTG",
        "timeline": [
            {"time": "26 Apr 09:30", "event": "Arrival (EOSP)", "type": "shared",
             "time_type": "waiting", "active_cargoes": _KT_CARGOES, "duration": "4h 05m"},
            {"time": "26 Apr 13:35", "event": "NOR Tendered", "type": "shared",
             "time_type": "waiting", "active_cargoes": _KT_CARGOES, "duration": "25m"},
            {"time": "26 Apr 14:00", "event": "Granted Free Pratique", "type": "shared",
             "time_type": "waiting", "active_cargoes": _KT_CARGOES, "duration": "50m"},
            {"time": "26 Apr 14:50", "event": "Commenced Shifting", "type": "shared",
             "time_type": "deduction", "active_cargoes": _KT_CARGOES, "duration": "1h 55m"},
            {"time": "26 Apr 16:45", "event": "Made Fast (Laytime Commences)", "type": "shared",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "duration": "ongoing"},
            {"time": "26 Apr 22:45", "event": "5P,7W Hose Connected", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO1", "duration": "2h 45m"},
            {"time": "27 Apr 01:30", "event": "5P,7W Loading Commenced", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO1", "duration": "21h 15m"},
            {"time": "27 Apr 22:45", "event": "5S,6P Hose Connected", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO2", "duration": "3h 50m"},
            {"time": "28 Apr 02:35", "event": "5S,6P Loading Commenced", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO2", "duration": "5h 25m"},
            {"time": "28 Apr 08:00", "event": "5P,7W Operations Complete", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO1", "duration": "11h 00m"},
            {"time": "28 Apr 19:00", "event": "5S,6P Operations Complete (Laytime Ends)", "type": "individual",
             "time_type": "laytime", "active_cargoes": _KT_CARGOES, "cargo": "CARGO2", "duration": "0m"},
            {"time": "28 Apr 21:00", "event": "Departure", "type": "shared",
             "time_type": "post-ops", "active_cargoes": _KT_CARGOES, "duration": "0m"},
        ],
        "laytime_calculation": {
            "total_laytime": "50h 15m",
            "primary_share": "100%",
            "block_time_method": True,
        },
        "transit_to_next": {"destination": "Kandla", "duration": "7d 15h 50m"},
    },
    "Kandla": {
        "country": "India",
        "berth": "OJ-4",
        "un_locode": "INKDL",
        "timeline": [
            {"time": "06 May 01:20", "event": "Arrival (EOSP)", "type": "shared",
             "time_type": "waiting", "active_cargoes": ["CARGO1"], "duration": "8h 00m"},
            {"time": "06 May 09:20", "event": "NOR Tendered", "type": "shared",
             "time_type": "waiting", "active_cargoes": ["CARGO1"], "duration": "6h 00m"},
            {"time": "06 May 15:20", "event": "Laytime Commences (NOR+6hrs)", "type": "shared",
             "time_type": "laytime", "active_cargoes": ["CARGO1"], "duration": "3d 09h 30m"},
            {"time": "10 May 00:50", "event": "Commenced Shifting", "type": "shared",
             "time_type": "deduction", "active_cargoes": ["CARGO1"], "duration": "4h 15m"},
            {"time": "10 May 05:05", "event": "Made Fast at Berth", "type": "shared",
             "time_type": "laytime", "active_cargoes": ["CARGO1"], "duration": "2h 35m"},
            {"time": "10 May 07:40", "event": "5P,7W Discharging Commenced", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO1"], "cargo": "CARGO1", "duration": "21h 20m"},
            {"time": "11 May 05:00", "event": "Squeegeeing 5P,7W (Deduction)", "type": "individual",
             "time_type": "deduction", "active_cargoes": ["CARGO1"], "cargo": "CARGO1", "duration": "15m"},
            {"time": "11 May 05:15", "event": "Squeegeeing Completed, Discharge Resumed", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO1"], "cargo": "CARGO1", "duration": "35m"},
            {"time": "11 May 05:50", "event": "5P,7W Operations Complete (Laytime Ends)", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO1"], "cargo": "CARGO1", "duration": "0m"},
            {"time": "11 May 06:00", "event": "Departure", "type": "shared",
             "time_type": "post-ops", "active_cargoes": ["CARGO1"], "duration": "0m"},
        ],
        "laytime_calculation": {
            "gross_time": "110h 30m",
            "deductions": "4h 30m",
            "net_laytime": "106h 00m",
            "primary_share": "100%",
            "block_time_method": True,
        },
        "transit_to_next": {"destination": "Port Qasim", "duration": "16h 10m"},
    },
    "Port Qasim": {
        "country": "Pakistan",
        "berth": "LCT",
        "un_locode": "PKPQM",
        "timeline": [
            {"time": "12 May 03:30", "event": "Arrival (EOSP)", "type": "shared",
             "time_type": "waiting", "active_cargoes": _PQ_CARGOES, "duration": "2h 15m"},
            {"time": "12 May 05:45", "event": "Notice of Readiness Tendered", "type": "shared",
             "time_type": "waiting", "active_cargoes": _PQ_CARGOES, "duration": "6h 00m"},
            {"time": "12 May 11:45", "event": "Laytime Can Commence (NOR+6hrs)", "type": "shared",
             "time_type": "waiting", "active_cargoes": _PQ_CARGOES, "duration": "4d 00h 45m"},
            {"time": "16 May 12:30", "event": "Commenced Shifting", "type": "shared",
             "time_type": "deduction", "active_cargoes": _PQ_CARGOES, "duration": "4h 40m"},
            {"time": "16 May 17:10", "event": "Made Fast at Berth", "type": "shared",
             "time_type": "waiting", "active_cargoes": _PQ_CARGOES, "duration": "1h 45m"},
            {"time": "16 May 18:55", "event": "All Preparations Complete", "type": "shared",
             "time_type": "waiting", "active_cargoes": _PQ_CARGOES, "duration": "20m"},
            {"time": "16 May 19:15", "event": "Commenced Discharge of Others", "type": "shared",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "duration": "12h 20m"},
            {"time": "17 May 07:35", "event": "4S Discharging Commenced", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_4S", "duration": "0m"},
            {"time": "17 May 07:35", "event": "6S Discharging Commenced", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_6S", "duration": "0m"},
            {"time": "17 May 07:35", "event": "8W Discharging Commenced", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_8W", "duration": "0m"},
            {"time": "17 May 07:35", "event": "9W Discharging Commenced", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_9W", "duration": "1h 10m"},
            {"time": "17 May 08:45", "event": "4S Operations Complete", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_4S", "duration": "45m"},
            {"time": "17 May 09:30", "event": "6S Operations Complete", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_6S", "duration": "1h 15m"},
            {"time": "17 May 10:45", "event": "8W Operations Complete", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_8W", "duration": "1h 15m"},
            {"time": "17 May 12:00", "event": "9W Operations Complete", "type": "individual",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "cargo": "OTHER_9W", "duration": "45m"},
            {"time": "17 May 12:45", "event": "Other Charterer Operations Complete", "type": "shared",
             "time_type": "non-unilever", "active_cargoes": _PQ_OTHERS, "duration": "0m"},
            {"time": "17 May 12:45", "event": "5S,6P Hose Connected (UNILEVER)", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO2"], "cargo": "CARGO2", "duration": "30m"},
            {"time": "17 May 13:15", "event": "5S,6P Discharging Commenced (UNILEVER)", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO2"], "cargo": "CARGO2", "duration": "8h 15m"},
            {"time": "17 May 21:30", "event": "Squeegeeing 6P (Deduction)", "type": "individual",
             "time_type": "deduction", "active_cargoes": ["CARGO2"], "cargo": "CARGO2", "duration": "10m"},
            {"time": "17 May 21:40", "event": "5S,6P Operations Complete (UNILEVER)", "type": "individual",
             "time_type": "laytime", "active_cargoes": ["CARGO2"], "cargo": "CARGO2", "duration": "0m"},
            {"time": "18 May 11:00", "event": "All Operations Complete", "type": "shared",
             "time_type": "post-ops", "active_cargoes": _PQ_CARGOES, "duration": "2h 00m"},
            {"time": "18 May 13:00", "event": "Departure", "type": "shared",
             "time_type": "post-ops", "active_cargoes": _PQ_CARGOES, "duration": "0m"},
        ],
        "laytime_calculation": {
            "total_port_time": "5d 23h 15m",
            "proration": {"primary": "13.0553%", "other": "86.9447%"},
            "primary_laytime": "21h 39m",
            "primary_deductions": "108h 16m",
            "block_time_method": True,
        },
        "transit_to_next": None,
    },
}

VOYAGE_FEED = {
    "vessel_info": VESSEL_INFO,
    "abbreviations": ABBREVIATIONS,
    "charter_terms": CHARTER_TERMS,
    "cargoes": CARGOES,
    "tanks": TANKS,
    "port_operations": PORT_OPERATIONS,
}
