"""Tests HTTP de las rutas de producto."""

from __future__ import annotations

import json
import unittest
from unittest import mock

from fastapi.testclient import TestClient

from app.main import app
from app.routers.productos import get_producto_service
from app.services.productos import ProductCatalogService
from tests.fakes import InMemoryProductoStore, producto


class ProductoRoutesTests(unittest.TestCase):
    """Valida codigos de estado y cuerpos de respuesta."""

    def setUp(self) -> None:
        self.store = InMemoryProductoStore()
        service = ProductCatalogService(self.store)
        app.dependency_overrides[get_producto_service] = lambda: service
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def _create(self, **overrides):
        response = self.client.post("/producto", json=producto(**overrides))
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_create_and_fetch(self) -> None:
        created = self._create()
        response = self.client.get(f"/producto/{created['_id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_fetch_absent_returns_null(self) -> None:
        response = self.client.get("/producto/" + "0" * 24)
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

    def test_create_missing_field_is_400(self) -> None:
        data = producto()
        del data["stock_disponible"]
        response = self.client.post("/producto", json=data)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "El campo stock_disponible es obligatorio."})

    def test_create_wrong_type_is_400(self) -> None:
        response = self.client.post("/producto", json=producto(precio_venta="10"))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"message": "Los tipos de datos de los campos son incorrectos."}
        )

    def test_create_schema_violation_lists_messages(self) -> None:
        response = self.client.post("/producto", json=producto(costo_produccion=-3))
        self.assertEqual(response.status_code, 400)
        messages = response.json()["message"]
        self.assertEqual(len(messages), 1)
        self.assertIn("costo_produccion", messages[0])

    def test_update_and_delete(self) -> None:
        created = self._create()
        response = self.client.put(f"/producto/{created['_id']}", json={"precio_venta": 999})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), dict(created, precio_venta=999))

        for _ in range(2):
            response = self.client.delete(f"/producto/{created['_id']}")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"message": "Producto eliminado"})
        self.assertIsNone(self.client.get(f"/producto/{created['_id']}").json())

    def test_update_absent_returns_null(self) -> None:
        response = self.client.put("/producto/" + "0" * 24, json={"color": "azul"})
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(response.json())

    def test_primeros_y_ultimos(self) -> None:
        created = [self._create(nombre_producto=f"P{i}") for i in range(5)]
        self.assertEqual(self.client.get("/productos/primeros").json(), created[:3])
        self.assertEqual(
            self.client.get("/productos/ultimos").json(), list(reversed(created[2:]))
        )
        self.assertEqual(self.client.get("/productos/ultimos?n=1").json(), [created[-1]])
        response = self.client.get("/productos/primeros?n=0")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": ["El campo n debe ser mayor o igual a 1."]})

    def test_list_all(self) -> None:
        created = [self._create() for _ in range(2)]
        response = self.client.get("/producto")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_store_failure_is_500(self) -> None:
        self.store.error = ConnectionError("mongo caido")
        response = self.client.get("/producto")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Error obteniendo productos"})

        response = self.client.post("/producto", json=producto())
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Error creando producto."})

    def test_update_without_body_returns_current(self) -> None:
        """Sin cuerpo el patch es vacio y se devuelve el registro actual."""
        created = self._create()
        response = self.client.put(f"/producto/{created['_id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), created)

    def test_update_with_array_body_is_500(self) -> None:
        created = self._create()
        response = self.client.put(f"/producto/{created['_id']}", json=[1, 2])
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Error actualizando producto"})
        self.assertEqual(self.client.get(f"/producto/{created['_id']}").json(), created)

    def test_create_malformed_json_is_400(self) -> None:
        response = self.client.post(
            "/producto", content="{bad", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"message": ["El cuerpo de la petición no es un JSON válido."]}
        )

    def test_create_infinite_number_is_rejected(self) -> None:
        """Un 1e999 se decodifica como infinito y no debe guardarse."""
        body = json.dumps(producto(precio_venta=1.5)).replace("1.5", "1e999")
        response = self.client.post(
            "/producto", content=body, headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(), {"message": "Los tipos de datos de los campos son incorrectos."}
        )
        self.assertEqual(self.store.docs, {})

    def test_without_connection_is_500(self) -> None:
        app.dependency_overrides.clear()
        with mock.patch("app.db.client.client", None):
            response = self.client.get("/producto")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Base de datos no disponible"})

    def test_health(self) -> None:
        self.assertEqual(self.client.get("/health").json(), {"status": "ok"})


if __name__ == "__main__":
    unittest.main()
