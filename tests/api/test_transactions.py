"""
Tests for sales transaction API endpoints.
"""

from pond_ledger.models import Customer
from pond_ledger.schemas.limits import MAX_AMOUNT, MAX_WEIGHT_KG


def sale_body(customer, **overrides):
    body = {
        "date": "2024-03-01",
        "customer_id": customer.id,
        "weight_kg": 10,
        "price_per_kg": 1500,
    }
    body.update(overrides)
    return body


class TestCreateTransaction:

    def test_create_returns_201_with_total(
        self, client, employee_headers, customer, pond
    ):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, pond_id=pond.id, payment_method="cash"),
        )
        assert response.status_code == 201
        data = response.json()
        assert data["total"] == 15000
        assert data["payment_status"] == "paid"
        assert data["pond_name"] == "Kolam 1"
        assert data["customer_name"] == "Pak Budi"
        assert data["created_by_name"] == "Employee"

    def test_fractional_weight_rounds_half_up(
        self, client, employee_headers, customer
    ):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, weight_kg=2.5, price_per_kg=101),
        )
        assert response.json()["total"] == 253

    def test_paid_sale_opens_no_debt(self, client, employee_headers, customer):
        client.post(
            "/transactions", headers=employee_headers, json=sale_body(customer)
        )
        assert client.get("/debts", headers=employee_headers).json() == []

    def test_unpaid_sale_opens_debt(self, client, employee_headers, customer):
        client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, payment_status="unpaid"),
        )
        debts = client.get("/debts", headers=employee_headers).json()
        assert len(debts) == 1
        assert debts[0]["amount"] == 15000

    def test_missing_weight_returns_400(
        self, client, employee_headers, customer
    ):
        body = sale_body(customer)
        del body["weight_kg"]
        response = client.post(
            "/transactions", headers=employee_headers, json=body
        )
        assert response.status_code == 400
        assert "weight_kg" in response.json()["error"]

    def test_zero_weight_returns_400(self, client, employee_headers, customer):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, weight_kg=0),
        )
        assert response.status_code == 400

    def test_negative_price_returns_400(
        self, client, employee_headers, customer
    ):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, price_per_kg=-5),
        )
        assert response.status_code == 400

    def test_unknown_pond_returns_400_and_writes_nothing(
        self, client, employee_headers, customer
    ):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, pond_id=404, payment_status="unpaid"),
        )
        assert response.status_code == 400
        listed = client.get("/transactions", headers=employee_headers)
        assert listed.json() == []
        assert client.get("/debts", headers=employee_headers).json() == []


class TestReadTransactions:

    def test_list_filters_by_customer(
        self, client, employee_headers, customer, db_session
    ):
        other = Customer(name="Bu Sari")
        db_session.add(other)
        db_session.commit()

        client.post(
            "/transactions", headers=employee_headers, json=sale_body(customer)
        )
        client.post(
            "/transactions", headers=employee_headers, json=sale_body(other)
        )

        response = client.get(
            f"/transactions?customer_id={other.id}", headers=employee_headers
        )
        assert [t["customer_name"] for t in response.json()] == ["Bu Sari"]

    def test_get_unknown_returns_404(self, client, employee_headers):
        response = client.get("/transactions/999", headers=employee_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Transaction not found"}


class TestUpdateTransaction:

    def test_update_recomputes_debt(self, client, employee_headers, customer):
        txn = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, payment_status="unpaid"),
        ).json()

        response = client.put(
            f"/transactions/{txn['id']}",
            headers=employee_headers,
            json=sale_body(customer, weight_kg=4, payment_status="unpaid"),
        )
        assert response.status_code == 200
        assert response.json()["total"] == 6000

        [debt] = client.get("/debts", headers=employee_headers).json()
        assert debt["amount"] == 6000
        assert debt["remaining_amount"] == 6000

    def test_update_unknown_returns_404(
        self, client, employee_headers, customer
    ):
        response = client.put(
            "/transactions/999",
            headers=employee_headers,
            json=sale_body(customer),
        )
        assert response.status_code == 404


class TestDeleteTransaction:

    def test_employee_gets_403(self, client, employee_headers, customer):
        txn = client.post(
            "/transactions", headers=employee_headers, json=sale_body(customer)
        ).json()

        response = client.delete(
            f"/transactions/{txn['id']}", headers=employee_headers
        )
        assert response.status_code == 403

    def test_owner_deletes_sale_and_debt(
        self, client, employee_headers, owner_headers, customer
    ):
        txn = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, payment_status="unpaid"),
        ).json()
        [debt] = client.get("/debts", headers=employee_headers).json()
        client.post(
            f"/debts/{debt['id']}/payments",
            headers=employee_headers,
            json={"payment_date": "2024-03-02", "amount": 1000},
        )

        response = client.delete(
            f"/transactions/{txn['id']}", headers=owner_headers
        )
        assert response.status_code == 200
        assert response.json() == {"message": "Transaction deleted successfully"}
        assert client.get("/debts", headers=employee_headers).json() == []
        payments = client.get(
            f"/debts/{debt['id']}/payments", headers=employee_headers
        )
        assert payments.json() == []

    def test_delete_unknown_returns_404(self, client, owner_headers):
        response = client.delete("/transactions/999", headers=owner_headers)
        assert response.status_code == 404


class TestNumericBounds:

    def post_raw(self, client, headers, raw_body):
        return client.post(
            "/transactions",
            headers={**headers, "Content-Type": "application/json"},
            content=raw_body,
        )

    def test_huge_weight_returns_400(self, client, employee_headers, customer):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, weight_kg=1e300),
        )
        assert response.status_code == 400
        assert "weight_kg" in response.json()["error"]

    def test_infinite_weight_returns_400(
        self, client, employee_headers, customer
    ):
        response = self.post_raw(
            client,
            employee_headers,
            '{"date": "2024-03-01", "customer_id": %d, '
            '"weight_kg": Infinity, "price_per_kg": 1500}' % customer.id,
        )
        assert response.status_code == 400
        assert "weight_kg" in response.json()["error"]

    def test_nan_weight_returns_400(self, client, employee_headers, customer):
        response = self.post_raw(
            client,
            employee_headers,
            '{"date": "2024-03-01", "customer_id": %d, '
            '"weight_kg": NaN, "price_per_kg": 1500}' % customer.id,
        )
        assert response.status_code == 400

    def test_price_beyond_limit_returns_400(
        self, client, employee_headers, customer
    ):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, price_per_kg=2**63),
        )
        assert response.status_code == 400
        assert "price_per_kg" in response.json()["error"]

    def test_largest_sale_is_stored(self, client, employee_headers, customer):
        response = client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(
                customer,
                weight_kg=MAX_WEIGHT_KG,
                price_per_kg=MAX_AMOUNT,
                payment_status="unpaid",
            ),
        )
        assert response.status_code == 201
        assert response.json()["total"] == MAX_WEIGHT_KG * MAX_AMOUNT
        assert response.json()["total"] < 2**63

    def test_rejected_sale_writes_nothing(
        self, client, employee_headers, customer
    ):
        client.post(
            "/transactions",
            headers=employee_headers,
            json=sale_body(customer, weight_kg=1e300, payment_status="unpaid"),
        )
        listed = client.get("/transactions", headers=employee_headers)
        assert listed.json() == []
        assert client.get("/debts", headers=employee_headers).json() == []
