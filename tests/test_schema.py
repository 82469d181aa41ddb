from collections import Counter

from logistics.core.schema import (
    COLLECTIONS, ETA_CALCULATIONS, INDEXES, RETURN_REQUESTS, ROUTES,
    index_table, indexes_for,
)

def test_three_collections():
    assert COLLECTIONS == ("eta_calculations", "routes", "return_requests")

def test_index_counts_per_collection():
    assert len(INDEXES) == 13
    assert Counter(s.collection for s in INDEXES) == {
        ETA_CALCULATIONS: 4, ROUTES: 4, RETURN_REQUESTS: 5,
    }

def test_every_index_pairs_lookup_with_discriminator():
    for spec in INDEXES:
        assert len(spec.keys) == 2
        assert all(order == 1 for _, order in spec.keys)
        disc = "status" if spec.collection == ROUTES else "isActive"
        assert spec.keys[1][0] == disc

def test_lookup_fields_in_declared_order():
    assert [s.keys[0][0] for s in indexes_for(ETA_CALCULATIONS)] == [
        "parcelId", "depotId", "driverId", "estimatedArrival"]
    assert [s.keys[0][0] for s in indexes_for(ROUTES)] == [
        "depotId", "driverId", "vehicleId", "plannedStartTime"]
    assert [s.keys[0][0] for s in indexes_for(RETURN_REQUESTS)] == [
        "returnId", "status", "customerId", "parcelId", "ttlExpiry"]

def test_default_style_names():
    spec = indexes_for(ETA_CALCULATIONS)[0]
    assert spec.name == "parcelId_1_isActive_1"
    assert spec.qualified_name == "eta_calculations.parcelId_1_isActive_1"
    assert len({s.qualified_name for s in INDEXES}) == 13

def test_index_table_shape():
    table = index_table()
    assert set(table) == set(COLLECTIONS)
    assert table[ROUTES][3] == [("plannedStartTime", 1), ("status", 1)]
