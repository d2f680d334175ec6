"""
Demo orders and customers used by DemoInvoicingService.

The fixtures cover the three lookup outcomes on 2024-05-01:
- numcheque 12345: one order
- numcheque 12388: two orders (same ticket from two cash registers)
- anything else: no order
"""

DEMO_ORDERS: list[dict] = [
    {
        "id": 7,
        "folio": "A-1007",
        "numcheque": "12345",
        "mesa": "4",
        "fecha": "2024-05-01T20:14:00Z",
        "cierre": "2024-05-01T21:02:00Z",
        "total": "1160.00",
        "subtotal": "1000.00",
        "totalimpuesto1": "160.00",
    },
    {
        "id": 8,
        "folio": "A-1008",
        "numcheque": "12388",
        "mesa": "12",
        "fecha": "2024-05-01T18:40:00Z",
        "cierre": "2024-05-01T19:55:00Z",
        "total": 580.0,
        "subtotal": 500.0,
        "totalimpuesto1": 80.0,
    },
    {
        "id": 9,
        "folio": "B-0211",
        "numcheque": "12388",
        "mesa": None,
        "fecha": "2024-05-01T23:10:00Z",
        "cierre": None,
        "total": "348.00",
        "subtotal": "300.00",
        "totalimpuesto1": "48.00",
    },
    {
        "id": 10,
        "folio": "A-1010",
        "numcheque": "12345",
        "mesa": "2",
        "fecha": "2024-05-02T14:05:00Z",
        "cierre": "2024-05-02T15:30:00Z",
        "total": "232.00",
        "subtotal": "200.00",
        "totalimpuesto1": "32.00",
    },
]

DEMO_CUSTOMERS: list[dict] = [
    {
        "id": 1,
        "taxId": "XAXX010101000",
        "legalName": "PUBLICO EN GENERAL",
        "taxSystem": "616",
        "email": "",
        "zip": "03100",
        "facturapiCustomerId": "cus_demo_0001",
        "createdAt": "2024-04-20T10:00:00Z",
        "updatedAt": "2024-04-20T10:00:00Z",
    },
]
