from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

print('ROOT:')
print(client.get('/').json())

print('\nHEALTH:')
print(client.get('/health').json())

print('\nDB HEALTH:')
try:
    resp = client.get('/health/db')
    print(resp.status_code)
    try:
        print(resp.json())
    except Exception:
        print(resp.text)
except Exception as e:
    print('DB call raised exception:', e)

print('\nOFFICERS:')
try:
    resp = client.get('/officers')
    print(resp.status_code)
    for officer in resp.json():
        print(f"  {officer['id']} {officer['name']} -> {officer['ward']} / {officer['division']}")
except Exception as e:
    print('Officers call raised exception:', e)

print('\nSUBMIT (text-only photo, no AI key needed):')
try:
    resp = client.post('/complaints', json={
        'user_id': 'USR-runchecks',
        'category': 'Water',
        'description': 'Major pipe burst flooding the street near the market',
        'photo_url': 'https://example.org/photo.jpg',
        'latitude': 20.88,
        'longitude': 77.745,
    })
    print(resp.status_code)
    print(resp.json())
except Exception as e:
    print('Submit call raised exception:', e)
