"""
Built-in Chernarus POI catalog.

Positions are [x, y, z] world coordinates in metres. Roaming events and
quest givers have no fixed position and skip proximity checks.
"""

from poiclaim.catalog.poi import POI, POICatalog

DEFAULT_POIS: list[POI] = [
    POI("Sinystok Bunker T5", ("Sinystok Bunker",), position=(1190.4285, 387.8023, 12374.2656)),
    POI("Yephbin Underground Facility T4", ("Yephbin",), position=(977.6797, 347.3488, 10234.9707)),
    POI("Rostoki Castle T5", ("Rostoki",), position=(495.5739, 207.4658, 8533.7031)),
    POI("Svetloyarsk Oil Rig T4", ("Oil Rig",), position=(15029.0967, 1.1094, 12761.8027)),
    POI("Elektro Raider Outpost T1", ("Elektro",), position=(9994.9443, 6.0224, 1648.2579)),
    POI("Tracksuit Tower T1", ("Tracksuit Tower",), position=(5794.2934, 65.2890, 2483.3896)),
    POI("Otmel Raider Outpost T1", ("Otmel",), position=(11580.1377, 1.9841, 3151.4504)),
    POI(
        "Svetloyarsk Raider Outpost T1",
        ("Svetloyarsk", "Svet", "Svet Raider"),
        position=(14348.5381, 3.3648, 13189.7441),
    ),
    POI("Solenchny Raider Outpost T1", ("Solenchny",), position=(13582.8535, 3.0000, 6355.3173)),
    POI("Klyuch Military T2", ("Klyuch",), position=(9289.1669, 107.2970, 13500.7099)),
    POI("Rog Castle Military T2", ("Rog",), position=(11252.0703, 290.9022, 4291.7099)),
    POI("Zub Castle Military T3", ("Zub",), position=(6529.2939, 387.5570, 5597.5400)),
    POI(
        "Kamensk Heli Depot T3",
        ("Kamensk", "Kamensk Heli"),
        position=(7098.5141, 356.1524, 14602.9316),
    ),
    POI("Tisy Power Plant T4", ("Tisy",), position=(577.2073, 501.8031, 13668.6054)),
    POI("Krasno Warehouse T2", ("Krasno",), position=(11868.5332, 140.0946, 12436.2246)),
    POI("Balota Warehouse T1", ("Balota",), position=(4941.2353, 9.5147, 2430.8066)),
    POI("Heli Crash (Active Now)", ("Heli",)),
    POI("Hunter Camp (Active Now)", ("Hunter",)),
    POI("Airdrop (Active Now)", ("Airdrop",)),
    POI("Knight (Quest)", ("Knight",)),
    POI("Banker (Quest)", ("Banker",)),
]


def default_catalog() -> POICatalog:
    """Build the built-in catalog."""
    return POICatalog(DEFAULT_POIS)
