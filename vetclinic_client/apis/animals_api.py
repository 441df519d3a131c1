from __future__ import annotations

from typing import Any

from vetclinic_client.config import AppSettings
from vetclinic_client.helpers import build_query_string
from vetclinic_client.http import HttpClient


class AnimalsApi:
    def __init__(self, settings: AppSettings, http_client: HttpClient):
        self._settings = settings
        self._http_client = http_client

    # Reference data

    def get_species(self) -> dict[str, Any]:
        return self._http_client.get_json("/animals/species")

    def get_breeds_by_species(self, species_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/species/{species_id}/breeds")

    # Animals

    def get_animals(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals{build_query_string(params)}")

    def get_animal(self, animal_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/{animal_id}")

    def create_animal(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/animals", data)

    def update_animal(self, animal_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/animals/{animal_id}", data)

    def delete_animal(self, animal_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/animals/{animal_id}")

    def update_animal_status(self, animal_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/animals/{animal_id}/status", data)

    def get_weight_history(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/{animal_id}/weight{build_query_string(params)}")

    def record_weight(self, animal_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json(f"/animals/{animal_id}/weight", data)

    def get_genealogy(self, animal_id: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/{animal_id}/genealogy{build_query_string(params)}")

    # Batches

    def get_batches(self, params: dict[str, Any] | None = None) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/batches{build_query_string(params)}")

    def get_batch(self, batch_id: str) -> dict[str, Any]:
        return self._http_client.get_json(f"/animals/batches/{batch_id}")

    def create_batch(self, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.post_json("/animals/batches", data)

    def update_batch(self, batch_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return self._http_client.patch_json(f"/animals/batches/{batch_id}", data)

    def delete_batch(self, batch_id: str) -> dict[str, Any]:
        return self._http_client.delete_json(f"/animals/batches/{batch_id}")

    def add_animals_to_batch(self, batch_id: str, animal_ids: list[str]) -> dict[str, Any]:
        return self._http_client.post_json(
            f"/animals/batches/{batch_id}/add-animals",
            {"animalIds": list(animal_ids)},
        )

    def remove_animals_from_batch(self, batch_id: str, animal_ids: list[str]) -> dict[str, Any]:
        return self._http_client.post_json(
            f"/animals/batches/{batch_id}/remove-animals",
            {"animalIds": list(animal_ids)},
        )
